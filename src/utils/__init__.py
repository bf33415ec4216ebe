"""Shared helpers."""

from .json_extraction import JSONExtractionError, extract_json, strip_code_fence

__all__ = ["JSONExtractionError", "extract_json", "strip_code_fence"]
