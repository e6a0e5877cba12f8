"""Shared pydantic base models."""

from .base import ProviderModel

__all__ = ["ProviderModel"]
