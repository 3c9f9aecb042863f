"""Safe-parse entry point for validating documents."""

from .lib import SafeParseResult, parse, safe_parse

__all__ = ["SafeParseResult", "parse", "safe_parse"]
