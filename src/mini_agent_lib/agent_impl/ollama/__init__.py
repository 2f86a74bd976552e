"""Expose the Ollama generation backend."""

from .core import GenericOllama, DEFAULT_MODEL, DEFAULT_BASE_URL

__all__ = ["GenericOllama", "DEFAULT_MODEL", "DEFAULT_BASE_URL"]
