"""Re-export the generation port, backend base class and shared generation models."""

from .base import GenerationPort, GenericLLM
from .models import GenerationResult, TokenUsage

__all__ = [
    "GenerationPort",
    "GenericLLM",
    "GenerationResult",
    "TokenUsage",
]
