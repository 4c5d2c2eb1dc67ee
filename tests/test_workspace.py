# tests/test_workspace.py
import zipfile
from unittest.mock import MagicMock

import pytest

from mangaflow.ingest.archive import DecodeError
from mangaflow.log_sink import LogSink
from mangaflow.pages.models import LogLevel, PageRange, PageStatus
from mangaflow.workspace import Workspace


def make_zip(path, names):
    with zipfile.ZipFile(path, "w") as zf:
        for name in names:
            zf.writestr(name, b"img")
    return path


@pytest.fixture
def workspace():
    return Workspace()


class TestLoad:

    def test_zip_reemplaza_registro_y_resetea_rango(self, workspace, tmp_path):
        archive = make_zip(tmp_path / "cap.zip", [f"{i}.png" for i in range(1, 16)])

        assert workspace.load(archive) is True

        assert len(workspace.pages) == 15
        assert workspace.page_range == PageRange(1, 10)
        assert workspace.log.entries()[0].level is LogLevel.SUCCESS

    def test_imagen_suelta_tambien_resetea_rango(self, workspace, tmp_path):
        archive = make_zip(tmp_path / "cap.zip", [f"{i}.png" for i in range(1, 6)])
        workspace.load(archive)
        workspace.set_range(3, 5)

        image = tmp_path / "suelta.png"
        image.write_bytes(b"png")
        workspace.load(image)

        assert len(workspace.pages) == 1
        assert workspace.page_range == PageRange(1, 1)

    def test_zip_vacio_deja_registro_intacto(self, workspace, tmp_path):
        workspace.load(make_zip(tmp_path / "ok.zip", ["1.png", "2.png"]))
        before = workspace.pages

        loaded = workspace.load(make_zip(tmp_path / "vacio.zip", ["leeme.txt"]))

        assert loaded is False
        assert workspace.pages is before
        assert workspace.log.entries()[0].level is LogLevel.ERROR

    def test_error_de_decodificacion_queda_en_log(self, tmp_path):
        ingestor = MagicMock()
        ingestor.ingest.side_effect = DecodeError("CRC inválido")
        workspace = Workspace(ingestor=ingestor)

        assert workspace.load(tmp_path / "x.zip") is False

        last = workspace.log.entries()[0]
        assert last.level is LogLevel.ERROR
        assert "CRC inválido" in last.message
        assert workspace.pages == ()

    def test_zip_cifrado_queda_en_log_y_no_toca_el_registro(self, workspace, tmp_path):
        workspace.load(make_zip(tmp_path / "ok.zip", ["1.png"]))
        before = workspace.pages

        archive = make_zip(tmp_path / "cifrado.zip", ["1.png", "2.png"])
        raw = bytearray(archive.read_bytes())
        raw[raw.find(b"PK\x01\x02") + 8] |= 0x01
        archive.write_bytes(bytes(raw))

        assert workspace.load(archive) is False
        assert workspace.pages is before
        last = workspace.log.entries()[0]
        assert last.level is LogLevel.ERROR
        assert "cifrado.zip" in last.message

    def test_secuencia_de_log_al_cargar_zip(self, workspace, tmp_path):
        workspace.load(make_zip(tmp_path / "cap.zip", ["1.png", "2.png", "3.png"]))

        messages = [e.message for e in reversed(workspace.log.entries())]
        assert messages == [
            "Analizando archivo: cap.zip",
            "3 imágenes encontradas. Extrayendo...",
            "3 páginas cargadas. Listo para procesar.",
        ]

    def test_log_vacio_inyectado_se_respeta(self, tmp_path):
        log = LogSink()
        workspace = Workspace(log=log)

        workspace.load(make_zip(tmp_path / "cap.zip", ["1.png"]))

        assert workspace.log is log
        assert len(log) == 3

    def test_primer_log_es_el_escaneo(self, workspace, tmp_path):
        workspace.load(make_zip(tmp_path / "cap.zip", ["1.png"]))

        oldest = workspace.log.entries()[-1]
        assert "cap.zip" in oldest.message


class TestEstado:

    def test_set_range_ajusta_a_los_limites(self, workspace, tmp_path):
        workspace.load(make_zip(tmp_path / "cap.zip", [f"{i}.png" for i in range(1, 6)]))

        assert workspace.set_range(0, 50) == PageRange(1, 5)

    def test_selected_pages_sin_registro(self, workspace):
        assert workspace.selected_pages() == []

    def test_clear(self, workspace, tmp_path):
        workspace.load(make_zip(tmp_path / "cap.zip", ["1.png", "2.png"]))

        workspace.clear()

        assert workspace.pages == ()
        assert len(workspace.log) == 1
        assert workspace.log.entries()[0].level is LogLevel.INFO

    def test_progress(self, workspace, tmp_path):
        workspace.load(make_zip(tmp_path / "cap.zip", ["1.png", "2.png", "3.png"]))

        assert workspace.progress()[PageStatus.PENDING] == 3
