# pages/__init__.py
from mangaflow.pages.models import (
    LogEntry,
    LogLevel,
    Page,
    PageRange,
    PageStatus,
    ProcessingOptions,
    Quality,
)
from mangaflow.pages.registry import Registry

__all__ = [
    "Page", "PageStatus", "PageRange", "Registry",
    "ProcessingOptions", "Quality",
    "LogEntry", "LogLevel",
]
