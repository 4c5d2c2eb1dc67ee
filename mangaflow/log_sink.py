# mangaflow/log_sink.py
import logging
from collections import deque

from mangaflow.pages.models import LogEntry, LogLevel

logger = logging.getLogger(__name__)

_DEFAULT_CAPACITY = 50


class LogSink:
    """
    Registro acotado de eventos visibles para el usuario.

    Guarda como máximo `capacity` entradas; al desbordarse descarta
    la más antigua. Cada entrada se reenvía también al logger estándar.
    """

    def __init__(self, capacity: int = _DEFAULT_CAPACITY):
        if capacity < 1:
            raise ValueError("La capacidad del log debe ser al menos 1")
        self._entries: deque[LogEntry] = deque(maxlen=capacity)

    def add(self, message: str, level: LogLevel = LogLevel.INFO) -> LogEntry:
        entry = LogEntry(message=message, level=level)
        self._entries.append(entry)

        if level is LogLevel.ERROR:
            logger.error(message)
        else:
            logger.info(message)

        return entry

    def entries(self) -> list[LogEntry]:
        """Entradas de la más reciente a la más antigua."""
        return list(reversed(self._entries))

    def clear(self) -> None:
        self._entries.clear()

    @property
    def capacity(self) -> int:
        return self._entries.maxlen

    def __len__(self) -> int:
        return len(self._entries)
