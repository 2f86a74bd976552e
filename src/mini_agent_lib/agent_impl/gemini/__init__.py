"""Expose the Gemini generation backend."""

from .core import GenericGemini

__all__ = ["GenericGemini"]
