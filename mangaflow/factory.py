# mangaflow/factory.py
from pathlib import Path
from typing import Optional

from mangaflow.enhancer.config_loader import load_enhancer_config
from mangaflow.enhancer.gemini import GeminiEnhancer
from mangaflow.exporter import ResultExporter
from mangaflow.orchestrator import BatchOrchestrator


def build_orchestrator(
    config_path: Optional[str]  = None,
    output_dir:  Optional[Path] = None,
) -> BatchOrchestrator:
    """
    Ensambla el BatchOrchestrator con todas sus dependencias.
    Punto de entrada único para el CLI.

    Lanza MissingCredentialError si no hay api_key, antes de
    construir el cliente; FileNotFoundError si config_path no existe.
    """
    config = load_enhancer_config(config_path)
    config.validate()

    return BatchOrchestrator(
        enhancer = GeminiEnhancer(config),
        exporter = ResultExporter(output_dir or config.output_dir),
    )
