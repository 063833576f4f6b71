"""Utility functions."""

from .keypath import MISSING, resolve_key_path

__all__ = ["MISSING", "resolve_key_path"]
