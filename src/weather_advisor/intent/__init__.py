"""Query interpretation package."""

from .extractor import IntentExtractor, build_extraction_prompt
from .models import Intent, Parsed, ParseFailure, ParseResult, RequestKind
from .parser import IntentReplyParser, slice_json_object

__all__ = [
    "Intent",
    "IntentExtractor",
    "IntentReplyParser",
    "ParseFailure",
    "ParseResult",
    "Parsed",
    "RequestKind",
    "build_extraction_prompt",
    "slice_json_object",
]
