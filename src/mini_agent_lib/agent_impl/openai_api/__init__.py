"""Expose the OpenAI generation backend."""

from .core import GenericOpenAI

__all__ = ["GenericOpenAI"]
