# enhancer/errors.py


class EnhancementError(Exception):
    """Base de los fallos de una página. El orquestador los captura por página."""
    pass


class NoCandidatesError(EnhancementError):
    """El modelo no devolvió ningún candidato."""
    pass


class NonImageResponseError(EnhancementError):
    """El modelo respondió solo con texto, sin imagen."""
    pass


class MissingCredentialError(RuntimeError):
    """No hay api_key configurada. Se lanza antes de cualquier llamada de red."""
    pass
