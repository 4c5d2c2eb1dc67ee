# enhancer/config_loader.py
import os
from pathlib import Path
from typing import Optional

import yaml

from mangaflow.enhancer.models import DEFAULT_MODEL, DEFAULT_OUTPUT_DIR, EnhancerConfig

_DEFAULT_CONFIG_PATH = Path.home() / ".mangaflow" / "config.yaml"
_DEFAULT_API_KEY     = "${GEMINI_API_KEY}"


def load_enhancer_config(config_path: Optional[str] = None) -> EnhancerConfig:
    """
    Carga la configuración del cliente desde YAML.
    Resuelve variables de entorno en el api_key (${VAR}).

    Si se pasa una ruta explícita y no existe, lanza FileNotFoundError.
    Si el archivo por defecto no existe, usa los valores por defecto
    (api_key desde GEMINI_API_KEY).
    """
    explicit = config_path or os.environ.get("MANGAFLOW_CONFIG_PATH")
    path     = Path(explicit or _DEFAULT_CONFIG_PATH)

    if not path.exists():
        if explicit:
            raise FileNotFoundError(
                f"Config no encontrada en {path}. "
                f"Copia config.example.yaml a ~/.mangaflow/config.yaml"
            )
        raw = {}
    else:
        with path.open(encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}

    output_dir = raw.get("output_dir")

    return EnhancerConfig(
        api_key         = _resolve_env(raw.get("api_key", _DEFAULT_API_KEY)),
        model           = raw.get("model", DEFAULT_MODEL),
        timeout_seconds = raw.get("timeout_seconds"),
        output_dir      = Path(output_dir).expanduser() if output_dir else DEFAULT_OUTPUT_DIR,
    )


def _resolve_env(value: Optional[str]) -> Optional[str]:
    """Expande ${VAR_NAME} desde el entorno."""
    if not value or not value.startswith("${"):
        return value
    var_name = value.strip("${}").strip()
    return os.environ.get(var_name)
