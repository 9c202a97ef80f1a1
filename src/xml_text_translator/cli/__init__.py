"""Command-line interface module for XML Text Translator.

This module provides CLI tools for escaping and unescaping files or standard
input, inspecting codepoints and benchmarking translation throughput.
"""

from .main import main

__all__ = ["main"]
