"""Concrete generation backends."""

from .gemini import GenericGemini
from .ollama import GenericOllama
from .openai_api import GenericOpenAI

__all__ = ["GenericGemini", "GenericOllama", "GenericOpenAI"]
