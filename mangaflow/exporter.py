# mangaflow/exporter.py
import base64
import binascii
import logging
from pathlib import Path

from mangaflow.enhancer.models import DEFAULT_OUTPUT_DIR
from mangaflow.pages.models import strip_data_url

logger = logging.getLogger(__name__)

_EXPORT_PREFIX = "manga_flow_"


class ExportError(Exception):
    """El resultado no se pudo guardar en disco."""
    pass


class ResultExporter:
    """
    Responsabilidad única: guardar la imagen resultante de una página.
    No sabe nada del modelo ni del lote; recibe un data URI y un nombre.
    """

    def __init__(self, output_dir: Path | None = None):
        self._output_dir = Path(output_dir) if output_dir else DEFAULT_OUTPUT_DIR

    @property
    def output_dir(self) -> Path:
        return self._output_dir

    def export(self, data_url: str, page_name: str) -> Path:
        """
        Escribe el resultado como output_dir/manga_flow_<nombre> y devuelve la ruta.
        Nunca sobrescribe: si el nombre ya existe añade " (1)", " (2)", ...
        """
        try:
            payload = base64.b64decode(strip_data_url(data_url), validate=True)
        except (binascii.Error, ValueError) as e:
            raise ExportError(f"Resultado ilegible para {page_name}: {e}") from e

        output_path = self._output_dir / export_filename(page_name)
        try:
            self._output_dir.mkdir(parents=True, exist_ok=True)
            output_path = _available_path(output_path)
            with output_path.open("xb") as f:
                f.write(payload)
        except OSError as e:
            raise ExportError(f"No se pudo guardar {output_path}: {e}") from e

        logger.info("Resultado guardado en: %s", output_path)
        return output_path


def export_filename(page_name: str) -> str:
    """Nombre de salida: prefijo + nombre sin ruta ("cap1/01.png" -> "manga_flow_01.png")."""
    clean = page_name.replace("\\", "/").rsplit("/", 1)[-1] or page_name
    return f"{_EXPORT_PREFIX}{clean}"


def _available_path(path: Path) -> Path:
    """Primera ruta libre entre path, "stem (1).ext", "stem (2).ext", ..."""
    candidate = path
    counter   = 1
    while candidate.exists():
        candidate = path.with_name(f"{path.stem} ({counter}){path.suffix}")
        counter  += 1
    return candidate
