"""Domain services."""

from .base import Service
from .display_service import DisplayResult, DisplayService, parse_timestamp
from .presentation_service import PresentationService
from .richtext_service import RichTextService
from .sanitizer import sanitize
from .thread_service import ThreadService

__all__ = [
    "DisplayResult",
    "DisplayService",
    "PresentationService",
    "RichTextService",
    "Service",
    "ThreadService",
    "parse_timestamp",
    "sanitize",
]
