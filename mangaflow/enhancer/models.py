# enhancer/models.py
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from mangaflow.enhancer.errors import MissingCredentialError

DEFAULT_MODEL      = "gemini-2.5-flash-image"
DEFAULT_OUTPUT_DIR = Path.home() / ".mangaflow" / "output"


@dataclass
class EnhancerConfig:
    """
    Configuración del cliente de mejora.
    Se carga desde ~/.mangaflow/config.yaml o, si no existe, del entorno.
    """
    api_key:         Optional[str]   = None
    model:           str             = DEFAULT_MODEL
    timeout_seconds: Optional[float] = None   # None: sin timeout, como el modelo remoto
    output_dir:      Path            = field(default_factory=lambda: DEFAULT_OUTPUT_DIR)

    def validate(self) -> None:
        """Falla rápido si falta la credencial, antes de construir el cliente."""
        if not self.api_key or not self.api_key.strip():
            raise MissingCredentialError(
                "Falta la api_key de Gemini. "
                "Define GEMINI_API_KEY en el entorno o en ~/.mangaflow/config.yaml."
            )
