# enhancer/gemini.py
import base64
import logging

import google.generativeai as genai

from mangaflow.enhancer.base import BaseEnhancer
from mangaflow.enhancer.errors import NoCandidatesError, NonImageResponseError
from mangaflow.enhancer.models import EnhancerConfig
from mangaflow.enhancer.prompt_builder import build_enhance_prompt
from mangaflow.pages.models import ProcessingOptions, strip_data_url

logger = logging.getLogger(__name__)

_FALLBACK_MIME = "image/png"


class GeminiEnhancer(BaseEnhancer):

    def __init__(self, config: EnhancerConfig):
        config.validate()
        self._config = config
        genai.configure(api_key=config.api_key)
        self._model = genai.GenerativeModel(model_name=config.model)

    @property
    def name(self) -> str:
        return self._config.model

    def enhance(
        self,
        image_b64: str,
        options:   ProcessingOptions,
        mime_type: str = _FALLBACK_MIME,
    ) -> str:
        prompt = build_enhance_prompt(
            colorize        = options.colorize,
            translate       = options.translate,
            target_language = options.target_language,
        )
        image_part = {
            "mime_type": mime_type,
            "data":      base64.b64decode(strip_data_url(image_b64)),
        }

        request_options = {}
        if self._config.timeout_seconds:
            request_options["timeout"] = self._config.timeout_seconds

        logger.debug("Enviando imagen a %s (%s)", self.name, mime_type)
        response = self._model.generate_content(
            [image_part, prompt],
            request_options=request_options or None,
        )

        return extract_image_data_url(response)


# ------------------------------------------------------------------
# Funciones de módulo
# ------------------------------------------------------------------

def extract_image_data_url(response) -> str:
    """
    Busca la primera parte con imagen inline del primer candidato
    y la devuelve como data URI.
    """
    candidates = getattr(response, "candidates", None)
    if not candidates:
        raise NoCandidatesError("Gemini no devolvió candidatos")

    content = getattr(candidates[0], "content", None)
    for part in getattr(content, "parts", None) or []:
        inline = getattr(part, "inline_data", None)
        data   = getattr(inline, "data", None) if inline is not None else None
        if not data:
            continue

        if isinstance(data, bytes):
            data = base64.b64encode(data).decode("ascii")
        mime_type = getattr(inline, "mime_type", None) or _FALLBACK_MIME
        return f"data:{mime_type};base64,{data}"

    raise NonImageResponseError(
        "Gemini devolvió texto en lugar de una imagen. Revisa las instrucciones del prompt."
    )
