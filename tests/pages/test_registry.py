# tests/pages/test_registry.py
import pytest

from mangaflow.pages.models import Page, PageRange, PageStatus
from mangaflow.pages.registry import (
    count_by_status,
    find_page,
    mark_completed,
    mark_error,
    mark_processing,
    select_range,
    update_page,
)


def make_registry(n: int = 5) -> tuple[Page, ...]:
    return tuple(Page(id=f"id{i}", name=f"{i}.png", data="eA==") for i in range(1, n + 1))


class TestTransiciones:

    def test_update_page_devuelve_registro_nuevo(self):
        registry = make_registry(3)

        updated = update_page(registry, "id2", status=PageStatus.PROCESSING)

        assert updated is not registry
        assert registry[1].status == PageStatus.PENDING
        assert updated[1].status == PageStatus.PROCESSING
        assert updated[0] is registry[0]

    def test_id_desconocido_no_cambia_nada(self):
        registry = make_registry(3)

        assert update_page(registry, "nope", status=PageStatus.ERROR) == registry

    def test_ciclo_completo(self):
        registry = make_registry(2)

        registry = mark_processing(registry, "id1")
        assert registry[0].status == PageStatus.PROCESSING

        registry = mark_completed(registry, "id1", "data:image/png;base64,AA==", "/out/x.png")
        page = find_page(registry, "id1")
        assert page.status == PageStatus.COMPLETED
        assert page.processed_url == "data:image/png;base64,AA=="
        assert page.output_path == "/out/x.png"

    def test_mark_error_conserva_mensaje(self):
        registry = mark_error(make_registry(2), "id2", "timeout")

        assert registry[1].status == PageStatus.ERROR
        assert registry[1].error == "timeout"

    def test_mark_processing_limpia_error_previo(self):
        registry = mark_error(make_registry(1), "id1", "falló")

        registry = mark_processing(registry, "id1")

        assert registry[0].error is None

    def test_orden_se_conserva(self):
        registry = make_registry(5)

        registry = mark_completed(registry, "id3", "data:x")

        assert [p.id for p in registry] == ["id1", "id2", "id3", "id4", "id5"]


class TestRango:

    def test_select_range_inclusivo(self):
        pages = select_range(make_registry(5), PageRange(2, 3))

        assert [p.id for p in pages] == ["id2", "id3"]

    def test_default_limita_a_diez(self):
        assert PageRange.default(25) == PageRange(1, 10)
        assert PageRange.default(4) == PageRange(1, 4)

    @pytest.mark.parametrize("start,end,total,expected", [
        (0, 3, 5, PageRange(1, 3)),
        (2, 99, 5, PageRange(2, 5)),
        (4, 2, 5, PageRange(4, 4)),
        (9, 12, 5, PageRange(5, 5)),
        (-3, -1, 5, PageRange(1, 1)),
    ])
    def test_clamp(self, start, end, total, expected):
        assert PageRange.clamp(start, end, total) == expected

    def test_len_y_str(self):
        page_range = PageRange(3, 7)
        assert len(page_range) == 5
        assert str(page_range) == "3-7"


def test_count_by_status_incluye_todos_los_estados():
    registry = mark_error(mark_completed(make_registry(4), "id1", "data:x"), "id2", "boom")

    counts = count_by_status(registry)

    assert counts == {
        PageStatus.PENDING:    2,
        PageStatus.PROCESSING: 0,
        PageStatus.COMPLETED:  1,
        PageStatus.ERROR:      1,
    }
