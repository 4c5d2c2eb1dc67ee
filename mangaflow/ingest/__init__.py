from mangaflow.ingest.archive import (
    ArchiveIngestor,
    DecodeError,
    EmptyArchiveError,
    IngestError,
)

__all__ = [
    "ArchiveIngestor",
    "IngestError",
    "EmptyArchiveError",
    "DecodeError",
]
