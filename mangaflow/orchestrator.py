# mangaflow/orchestrator.py
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Optional

from mangaflow.enhancer.base import BaseEnhancer
from mangaflow.exporter import ExportError, ResultExporter
from mangaflow.pages.models import LogLevel, Page, ProcessingOptions
from mangaflow.pages.registry import (
    find_page,
    mark_completed,
    mark_error,
    mark_processing,
    update_page,
)
from mangaflow.workspace import Workspace

logger = logging.getLogger(__name__)

PageCallback = Callable[[Page], None]


# ------------------------------------------------------------------
# Resultado del lote: lo que el CLI consume
# ------------------------------------------------------------------

@dataclass
class BatchResult:
    total:        int
    completed:    int        = 0
    failed:       int        = 0
    output_paths: list[Path] = field(default_factory=list)


# ------------------------------------------------------------------
# Orchestrator
# ------------------------------------------------------------------

class BatchOrchestrator:
    """
    Procesa el rango seleccionado del Workspace, página a página.
    No tiene lógica de negocio propia; coordina enhancer, exporter y log.

    Responsabilidades:
    - Procesar las páginas en orden estricto, una cada vez
    - Manejar errores por página sin detener el lote
    - Guardar cada resultado en cuanto está listo
    - Ignorar una segunda ejecución mientras hay un lote en curso
    """

    def __init__(self, enhancer: BaseEnhancer, exporter: ResultExporter):
        self._enhancer = enhancer
        self._exporter = exporter

    def run(
        self,
        workspace: Workspace,
        options:   ProcessingOptions,
        on_page:   Optional[PageCallback] = None,
    ) -> Optional[BatchResult]:
        """
        Punto de entrada principal.
        Si ya hay un lote en curso sobre este workspace no hace nada y devuelve None.
        Sin páginas seleccionadas devuelve un BatchResult vacío y no escribe en el log.
        """
        if workspace.is_processing:
            logger.debug("Lote en curso, se ignora la nueva ejecución")
            return None

        if not workspace.selected_pages():
            logger.debug("No hay páginas seleccionadas, nada que procesar")
            return BatchResult(total=0)

        workspace.is_processing = True
        try:
            return self._process_range(workspace, options, on_page)
        finally:
            workspace.is_processing = False

    # ------------------------------------------------------------------
    # Helpers privados
    # ------------------------------------------------------------------

    def _process_range(
        self,
        workspace: Workspace,
        options:   ProcessingOptions,
        on_page:   Optional[PageCallback],
    ) -> BatchResult:
        page_range = workspace.page_range
        to_process = workspace.selected_pages()
        result     = BatchResult(total=len(to_process))

        workspace.log.add(
            f"Iniciando lote de páginas {page_range.start} a {page_range.end}..."
        )

        for i, page in enumerate(to_process, start=1):
            workspace.pages = mark_processing(workspace.pages, page.id)
            self._notify(workspace, page.id, on_page)
            workspace.log.add(f"Procesando [{i}/{len(to_process)}]: {page.name}")

            # Cada página tiene su propio try/except; un fallo no detiene el lote
            try:
                processed_url = self._enhancer.enhance(page.data, options, page.mime_type)
            except Exception as e:
                logger.exception("Fallo en la página %s", page.name)
                self._fail(workspace, page, str(e) or type(e).__name__)
                result.failed += 1
                self._notify(workspace, page.id, on_page)
                continue

            workspace.pages = mark_completed(workspace.pages, page.id, processed_url)
            workspace.log.add(f"Completada: {page.name}", LogLevel.SUCCESS)

            try:
                output_path = self._exporter.export(processed_url, page.name)
            except ExportError as e:
                self._fail(workspace, page, str(e))
                result.failed += 1
            else:
                workspace.pages = update_page(
                    workspace.pages, page.id, output_path=str(output_path)
                )
                result.completed += 1
                result.output_paths.append(output_path)

            self._notify(workspace, page.id, on_page)

        workspace.log.add("Lote completado.", LogLevel.SUCCESS)
        logger.info(
            "Lote terminado: %d completadas, %d con error de %d",
            result.completed, result.failed, result.total,
        )
        return result

    @staticmethod
    def _fail(workspace: Workspace, page: Page, message: str) -> None:
        workspace.log.add(f"Error procesando {page.name}: {message}", LogLevel.ERROR)
        workspace.pages = mark_error(workspace.pages, page.id, message)

    @staticmethod
    def _notify(workspace: Workspace, page_id: str, on_page: Optional[PageCallback]) -> None:
        if on_page is None:
            return
        page = find_page(workspace.pages, page_id)
        if page is not None:
            on_page(page)
