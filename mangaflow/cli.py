# mangaflow/cli.py
import logging
import sys
from pathlib import Path
from typing import Optional

import click
from dotenv import load_dotenv

from mangaflow.enhancer.errors import MissingCredentialError
from mangaflow.factory import build_orchestrator
from mangaflow.orchestrator import BatchResult
from mangaflow.pages.models import LogLevel, Page, PageStatus, ProcessingOptions, Quality
from mangaflow.workspace import Workspace


# Carga .env una sola vez, antes que cualquier otra cosa
load_dotenv()

_SUPPORTED_FORMATS = {".zip", ".cbz", ".jpg", ".jpeg", ".png", ".webp", ".bmp"}
_LANGUAGE_PUNCTUATION = " -'()"

_STATUS_LABELS = {
    PageStatus.PENDING:    "pendiente",
    PageStatus.PROCESSING: "procesando",
    PageStatus.COMPLETED:  "completada",
    PageStatus.ERROR:      "error",
}


# ------------------------------------------------------------------
# Grupo raíz
# ------------------------------------------------------------------

@click.group()
@click.version_option(package_name="mangaflow")
@click.option("--verbose", "-v", is_flag=True, help="Muestra el log interno (DEBUG).")
def main(verbose: bool):
    """
    MangaFlow: colorea y traduce páginas de manga con IA.

    Acepta una imagen suelta o un ZIP/CBZ con el capítulo completo.
    """
    if verbose:
        logging.basicConfig(
            level  = logging.DEBUG,
            format = "%(asctime)s %(levelname)s %(name)s: %(message)s",
        )


# ------------------------------------------------------------------
# mangaflow process
# ------------------------------------------------------------------

@main.command()
@click.argument("file", type=click.Path(exists=False))   # validamos nosotros para mejor mensaje
@click.option("--start", type=int, default=None, help="Primera página del rango (1-based).")
@click.option("--end",   type=int, default=None, help="Última página del rango (incluida).")
@click.option(
    "--colorize/--no-colorize",
    default      = True,
    show_default = True,
    help         = "Colorea páginas en blanco y negro.",
)
@click.option(
    "--translate/--no-translate",
    default      = True,
    show_default = True,
    help         = "Traduce los globos de texto.",
)
@click.option(
    "--to", "target_language",
    default      = "English",
    show_default = True,
    metavar      = "LANGUAGE",
    help         = "Idioma destino de la traducción (ej: English, Spanish)",
)
@click.option(
    "--quality",
    default      = Quality.HIGH.value,
    show_default = True,
    type         = click.Choice([q.value for q in Quality], case_sensitive=False),
)
@click.option(
    "--output-dir", "-o",
    type    = click.Path(file_okay=False),
    default = None,
    help    = "Carpeta donde se guardan los resultados (por defecto ~/.mangaflow/output)",
)
@click.option("--config", "config_path", type=click.Path(), default=None, help="Ruta al config.yaml")
def process(
    file:            str,
    start:           Optional[int],
    end:             Optional[int],
    colorize:        bool,
    translate:       bool,
    target_language: str,
    quality:         str,
    output_dir:      Optional[str],
    config_path:     Optional[str],
):
    """Procesa un rango de páginas y guarda cada resultado."""

    # ── Validaciones de entrada ───────────────────────────────────
    _validate_file(file)
    if translate:
        _validate_language(target_language)

    options = ProcessingOptions(
        colorize        = colorize,
        translate       = translate,
        target_language = target_language.strip(),
        quality         = Quality(quality.lower()),
    )

    # ── Ensamblar pipeline (falla rápido sin credencial) ──────────
    try:
        orchestrator = build_orchestrator(
            config_path = config_path,
            output_dir  = Path(output_dir) if output_dir else None,
        )
    except (MissingCredentialError, FileNotFoundError) as e:
        _abort(str(e))

    # ── Cargar páginas ────────────────────────────────────────────
    workspace = _load_workspace(file)
    page_range = workspace.set_range(
        start or workspace.page_range.start,
        end or max(start or 1, workspace.page_range.end),
    )
    click.echo(f"[mangaflow] Rango seleccionado: páginas {page_range} de {len(workspace.pages)}")

    # ── Ejecutar ──────────────────────────────────────────────────
    try:
        result = orchestrator.run(workspace, options, on_page=_echo_page)

    except KeyboardInterrupt:
        click.echo("\n[mangaflow] Proceso interrumpido. Los resultados ya guardados se conservan.")
        sys.exit(0)

    except Exception as e:
        _error(f"Error inesperado: {type(e).__name__}: {e}")
        sys.exit(1)

    # ── Resumen final ─────────────────────────────────────────────
    _print_summary(result, output_dir)

    if result.total and result.failed == result.total:
        sys.exit(2)


# ------------------------------------------------------------------
# mangaflow pages
# ------------------------------------------------------------------

@main.command()
@click.argument("file", type=click.Path(exists=False))
def pages(file: str):
    """Lista las páginas del archivo en el orden en que se procesarían."""
    _validate_file(file)
    workspace = _load_workspace(file)

    width = len(str(len(workspace.pages)))
    for index, page in enumerate(workspace.pages, start=1):
        click.echo(f"{index:>{width}}  {page.name}")

    click.echo(f"[mangaflow] Rango por defecto: {workspace.page_range}")


# ------------------------------------------------------------------
# Helpers de validación
# ------------------------------------------------------------------

def _validate_file(path: str) -> None:
    """Verifica existencia y formato del archivo."""
    p = Path(path)

    if not p.exists():
        _abort(f"Archivo no encontrado: {path}")

    if not p.is_file():
        _abort(f"La ruta no es un archivo: {path}")

    if p.suffix.lower() not in _SUPPORTED_FORMATS:
        supported = ", ".join(sorted(_SUPPORTED_FORMATS))
        _abort(
            f"Formato no soportado: '{p.suffix}'\n"
            f"Formatos disponibles: {supported}"
        )


def _validate_language(language: str) -> None:
    """El idioma viaja literal en el prompt: letras, espacios, guiones, apóstrofos y paréntesis."""
    language = language.strip()

    if not language:
        _abort("--to no puede estar vacío.")

    letters = "".join(c for c in language if c not in _LANGUAGE_PUNCTUATION)
    if not letters.isalpha():
        _abort(
            f"--to contiene caracteres inválidos: '{language}'\n"
            f"Ejemplos válidos: English, Spanish, Português (Brasil)"
        )

    if len(language) > 40:
        _abort(f"--to: nombre de idioma demasiado largo: '{language}'")


def _load_workspace(file: str) -> Workspace:
    """Carga el archivo; si la ingesta falla muestra el log y sale con código 1."""
    workspace = Workspace()
    loaded    = workspace.load(file)

    for entry in reversed(workspace.log.entries()):
        if entry.level is LogLevel.ERROR:
            _error(entry.message)
        else:
            click.echo(f"[mangaflow] {entry.message}")

    if not loaded:
        sys.exit(1)

    return workspace


# ------------------------------------------------------------------
# Helpers de output
# ------------------------------------------------------------------

def _echo_page(page: Page) -> None:
    label = _STATUS_LABELS[page.status]
    if page.status is PageStatus.ERROR:
        _error(f"  ✗ {page.name}: {page.error}")
    elif page.status is PageStatus.COMPLETED:
        click.echo(f"[mangaflow]   ✓ {page.name} → {page.output_path or label}")
    else:
        click.echo(f"[mangaflow]   … {page.name} ({label})")


def _print_summary(result: BatchResult, output_dir: Optional[str] = None) -> None:
    """Imprime el resumen final del lote."""
    click.echo("")
    click.echo("─" * 50)
    if result.failed:
        click.echo("[mangaflow] ⚠ Lote terminado con errores")
    else:
        click.echo("[mangaflow] ✓ Lote completado")
    click.echo(f"[mangaflow]   Páginas      : {result.total}")
    click.echo(f"[mangaflow]   Completadas  : {result.completed}")

    if result.failed:
        click.echo(
            click.style(f"[mangaflow]   Con error    : {result.failed}", fg="yellow")
        )

    if result.output_paths:
        click.echo(f"[mangaflow]   Output       : {result.output_paths[0].parent}")
    elif output_dir:
        click.echo(f"[mangaflow]   Output       : {output_dir}")
    click.echo("─" * 50)


def _abort(message: str) -> None:
    """Error de validación: culpa del usuario."""
    click.echo(click.style(f"[mangaflow] Error: {message}", fg="red"), err=True)
    sys.exit(1)


def _error(message: str) -> None:
    """Error de sistema, no es culpa del usuario."""
    click.echo(click.style(f"[mangaflow] {message}", fg="red"), err=True)
