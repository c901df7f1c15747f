"""Utilities module."""

from .config import LobeConfig

__all__ = ["LobeConfig"]
