"""Utility functions for dockerscope."""

from .validator import is_compressed_path, validate_source_archive

__all__ = ["is_compressed_path", "validate_source_archive"]
