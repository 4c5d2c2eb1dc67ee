# enhancer/base.py
from abc import ABC, abstractmethod

from mangaflow.pages.models import ProcessingOptions


class BaseEnhancer(ABC):
    """
    Contrato del cliente de mejora de imagen.
    El Orchestrator solo habla con esta interfaz, nunca con gemini.py directamente.
    """

    @abstractmethod
    def enhance(
        self,
        image_b64: str,
        options:   ProcessingOptions,
        mime_type: str = "image/png",
    ) -> str:
        """
        Envía una imagen (base64 o data URI) y devuelve la imagen
        transformada como data URI.
        Una sola llamada de red, sin reintentos.
        Puede lanzar: NoCandidatesError, NonImageResponseError
        y cualquier error de transporte del SDK.
        """
        ...

    @property
    @abstractmethod
    def name(self) -> str:
        """Identificador del modelo, usado en logs."""
        ...
