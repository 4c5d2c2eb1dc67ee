# ingest/archive.py
import base64
import io
import logging
import os
import unicodedata
import uuid
import zipfile
import zlib
from pathlib import Path

from natsort import natsorted, ns

from mangaflow.log_sink import LogSink
from mangaflow.pages.models import Page

logger = logging.getLogger(__name__)

_ARCHIVE_EXTENSIONS = {".zip", ".cbz"}
_IMAGE_EXTENSIONS   = {".jpg", ".jpeg", ".png", ".webp", ".bmp"}
_SYSTEM_MARKERS     = ("__MACOSX",)
_ENCRYPTED_FLAG     = 0x1

_MIME_TYPES = {
    ".jpg":  "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png":  "image/png",
    ".webp": "image/webp",
    ".bmp":  "image/bmp",
}


# ------------------------------------------------------------------
# Errores propios del ingestor
# ------------------------------------------------------------------

class IngestError(Exception):
    """Base de los errores de ingesta. Abortan la carga, nunca la app."""
    pass


class EmptyArchiveError(IngestError):
    """El archivo comprimido no contiene imágenes soportadas."""
    pass


class DecodeError(IngestError):
    """No se pudo leer el archivo comprimido o la imagen."""
    pass


# ------------------------------------------------------------------
# Ingestor
# ------------------------------------------------------------------

class ArchiveIngestor:
    """
    Convierte un archivo subido en una lista ordenada de Page.

    - Imagen suelta: una sola página, base64 del archivo entero.
    - ZIP/CBZ: filtra directorios, ocultos y carpetas de sistema,
      conserva solo formatos soportados y ordena en orden natural
      ("2.jpg" antes que "10.jpg"), sin distinguir mayúsculas ni acentos.

    Si recibe un LogSink, informa allí cuántas imágenes va a extraer.
    """

    def __init__(self, log: LogSink | None = None):
        self._log = log

    def ingest(self, file_path: str | Path) -> list[Page]:
        path = Path(file_path)

        try:
            payload = path.read_bytes()
        except OSError as e:
            raise DecodeError(f"No se pudo leer {path.name}: {e}") from e

        return self.ingest_bytes(path.name, payload)

    def ingest_bytes(self, filename: str, payload: bytes) -> list[Page]:
        if is_archive(filename):
            return self._ingest_archive(filename, payload)
        return [self._single_page(filename, payload)]

    # ------------------------------------------------------------------
    # Helpers privados
    # ------------------------------------------------------------------

    def _ingest_archive(self, filename: str, payload: bytes) -> list[Page]:
        try:
            with zipfile.ZipFile(io.BytesIO(payload)) as archive:
                entries = [info for info in archive.infolist() if is_eligible_entry(info)]

                if not entries:
                    raise EmptyArchiveError(
                        f"No hay imágenes válidas en {filename}. "
                        f"Formatos soportados: {supported_formats()}"
                    )

                entries = natsorted(entries, key=_collation_key, alg=ns.IGNORECASE)
                logger.info("%s: %d imágenes encontradas", filename, len(entries))
                if self._log is not None:
                    self._log.add(f"{len(entries)} imágenes encontradas. Extrayendo...")

                return [
                    _build_page(info.filename, _read_entry(archive, info, filename))
                    for info in entries
                ]

        except (
            zipfile.BadZipFile,
            zipfile.LargeZipFile,
            zlib.error,
            NotImplementedError,
            RuntimeError,
            OSError,
        ) as e:
            raise DecodeError(f"No se pudo extraer {filename}: {e}") from e

    @staticmethod
    def _single_page(filename: str, payload: bytes) -> Page:
        return _build_page(filename, payload)


# ------------------------------------------------------------------
# Funciones de módulo
# ------------------------------------------------------------------

def is_archive(filename: str) -> bool:
    return _extension(filename) in _ARCHIVE_EXTENSIONS


def is_eligible_entry(info: zipfile.ZipInfo) -> bool:
    """Descarta directorios, ocultos (.algo), carpetas de sistema y formatos no soportados."""
    if info.is_dir():
        return False

    leaf = info.filename.rsplit("/", 1)[-1]
    if leaf.startswith("."):
        return False

    if any(marker in info.filename for marker in _SYSTEM_MARKERS):
        return False

    return _extension(leaf) in _IMAGE_EXTENSIONS


def supported_formats() -> str:
    return ", ".join(sorted(_IMAGE_EXTENSIONS))


def _read_entry(archive: zipfile.ZipFile, info: zipfile.ZipInfo, filename: str) -> bytes:
    if info.flag_bits & _ENCRYPTED_FLAG:
        raise DecodeError(
            f"No se pudo extraer {filename}: {info.filename} está protegido con contraseña"
        )
    return archive.read(info)


def _collation_key(info: zipfile.ZipInfo) -> str:
    """Nombre sin diacríticos: "étape2" ordena junto a "etape2"."""
    decomposed = unicodedata.normalize("NFKD", info.filename)
    return "".join(c for c in decomposed if not unicodedata.combining(c))


def _build_page(name: str, payload: bytes) -> Page:
    return Page(
        id        = uuid.uuid4().hex,
        name      = name,
        data      = base64.b64encode(payload).decode("ascii"),
        mime_type = _MIME_TYPES.get(_extension(name), "image/png"),
    )


def _extension(filename: str) -> str:
    return os.path.splitext(filename)[1].lower()
