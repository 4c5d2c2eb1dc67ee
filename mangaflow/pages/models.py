# pages/models.py
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional


class PageStatus(Enum):
    PENDING    = "pending"
    PROCESSING = "processing"
    COMPLETED  = "completed"
    ERROR      = "error"


class Quality(Enum):
    STANDARD = "standard"
    HIGH     = "high"


class LogLevel(Enum):
    INFO    = "info"
    SUCCESS = "success"
    ERROR   = "error"


@dataclass(frozen=True)
class Page:
    """
    Una página del lote. Inmutable: cada transición de estado
    produce una Page nueva (ver pages/registry.py).
    """
    id:            str
    name:          str
    data:          str                   # base64 del original, sin prefijo data:
    mime_type:     str           = "image/png"
    status:        PageStatus    = PageStatus.PENDING
    processed_url: Optional[str] = None  # data URI devuelto por el modelo
    error:         Optional[str] = None
    output_path:   Optional[str] = None

    @property
    def original_url(self) -> str:
        return f"data:{self.mime_type};base64,{self.data}"


@dataclass(frozen=True)
class ProcessingOptions:
    """Opciones fijas durante toda una ejecución del lote."""
    colorize:        bool    = True
    translate:       bool    = True
    target_language: str     = "English"
    quality:         Quality = Quality.HIGH


@dataclass(frozen=True)
class LogEntry:
    message:   str
    level:     LogLevel = LogLevel.INFO
    timestamp: datetime = field(default_factory=datetime.now)


_DEFAULT_RANGE_SIZE = 10


@dataclass(frozen=True)
class PageRange:
    """Rango 1-based inclusivo sobre el registro de páginas."""
    start: int
    end:   int

    @classmethod
    def default(cls, total: int) -> "PageRange":
        return cls(start=1, end=max(1, min(total, _DEFAULT_RANGE_SIZE)))

    @classmethod
    def clamp(cls, start: int, end: int, total: int) -> "PageRange":
        """
        Ajusta start/end para cumplir 1 <= start <= end <= total.
        Con total == 0 devuelve [1, 1]; select_range lo trata como vacío.
        """
        upper = max(1, total)
        start = max(1, min(start, upper))
        end   = max(start, min(end, upper))
        return cls(start=start, end=end)

    def __len__(self) -> int:
        return self.end - self.start + 1

    def __str__(self) -> str:
        return f"{self.start}-{self.end}"


def strip_data_url(value: str) -> str:
    """Quita el prefijo data:...;base64, si lo hay."""
    if value.startswith("data:") and "," in value:
        return value.split(",", 1)[1]
    return value
