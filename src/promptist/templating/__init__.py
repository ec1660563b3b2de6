"""Template variable parsing and resolution."""

from .context import ClipboardEntry, VariableResolutionContext
from .parser import (
    TemplateParseResult,
    TemplateVariable,
    VariableKind,
    extract_variables,
    parse,
)
from .resolver import resolve, resolve_variable

__all__ = [
    "ClipboardEntry",
    "TemplateParseResult",
    "TemplateVariable",
    "VariableKind",
    "VariableResolutionContext",
    "extract_variables",
    "parse",
    "resolve",
    "resolve_variable",
]
