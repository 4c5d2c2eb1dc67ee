# mangaflow/workspace.py
from pathlib import Path
from typing import Optional

from mangaflow.ingest.archive import ArchiveIngestor, DecodeError, EmptyArchiveError
from mangaflow.log_sink import LogSink
from mangaflow.pages.models import LogLevel, PageRange, PageStatus
from mangaflow.pages.registry import Registry, count_by_status, select_range


class Workspace:
    """
    Estado de una sesión: registro de páginas, rango seleccionado y log.

    El registro solo se reemplaza completo (nunca se muta en sitio),
    y solo lo escriben load(), clear() y el BatchOrchestrator.
    """

    def __init__(
        self,
        ingestor: Optional[ArchiveIngestor] = None,
        log:      Optional[LogSink]         = None,
    ):
        self.log           = log if log is not None else LogSink()
        self._ingestor     = ingestor or ArchiveIngestor(log=self.log)
        self.pages:         Registry  = ()
        self.page_range:    PageRange = PageRange.default(0)
        self.is_processing: bool      = False

    # ------------------------------------------------------------------
    # Ingesta
    # ------------------------------------------------------------------

    def load(self, file_path: str | Path) -> bool:
        """
        Carga un archivo (imagen o ZIP) y reemplaza el registro.
        Los errores de ingesta quedan en el log y dejan el registro intacto.
        Devuelve True si se cargó al menos una página.
        """
        path = Path(file_path)
        self.log.add(f"Analizando archivo: {path.name}")

        try:
            pages = self._ingestor.ingest(path)
        except EmptyArchiveError as e:
            self.log.add(str(e), LogLevel.ERROR)
            return False
        except DecodeError as e:
            self.log.add(f"Error al cargar {path.name}: {e}", LogLevel.ERROR)
            return False

        self.pages      = tuple(pages)
        self.page_range = PageRange.default(len(self.pages))
        self.log.add(
            f"{len(self.pages)} páginas cargadas. Listo para procesar.",
            LogLevel.SUCCESS,
        )
        return True

    # ------------------------------------------------------------------
    # Rango y estado
    # ------------------------------------------------------------------

    def set_range(self, start: int, end: int) -> PageRange:
        """Ajusta el rango a los límites del registro actual."""
        self.page_range = PageRange.clamp(start, end, len(self.pages))
        return self.page_range

    def selected_pages(self) -> list:
        if not self.pages:
            return []
        return select_range(self.pages, self.page_range)

    def progress(self) -> dict[PageStatus, int]:
        return count_by_status(self.pages)

    def clear(self) -> None:
        self.pages      = ()
        self.page_range = PageRange.default(0)
        self.log.clear()
        self.log.add("Espacio de trabajo vaciado.")
