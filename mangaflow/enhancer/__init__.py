from mangaflow.enhancer.base import BaseEnhancer
from mangaflow.enhancer.config_loader import load_enhancer_config
from mangaflow.enhancer.errors import (
    EnhancementError,
    MissingCredentialError,
    NoCandidatesError,
    NonImageResponseError,
)
from mangaflow.enhancer.models import EnhancerConfig
from mangaflow.enhancer.prompt_builder import build_enhance_prompt

__all__ = [
    "BaseEnhancer",
    "EnhancerConfig",
    "EnhancementError",
    "MissingCredentialError",
    "NoCandidatesError",
    "NonImageResponseError",
    "build_enhance_prompt",
    "load_enhancer_config",
]
