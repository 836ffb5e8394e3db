"""Backends for F-program output generation (plain text)."""

from .text import format_expression, format_lines, format_statement

__all__ = ["format_expression", "format_lines", "format_statement"]
