"""Data models for the proposal deck builder."""

from .product import ProductRecord, ImageReference
from .session import ContactInfo, ContactRecord, ProjectMeta, DeckForm, SessionPayload
from .deck import SlideKind, SlideRecord, GeneratedDocument, ExportRequest
from .fetch import FetchResult

__all__ = [
    # Product models
    "ProductRecord",
    "ImageReference",
    # Session models
    "ContactInfo",
    "ContactRecord",
    "ProjectMeta",
    "DeckForm",
    "SessionPayload",
    # Deck models
    "SlideKind",
    "SlideRecord",
    "GeneratedDocument",
    "ExportRequest",
    # Fetch models
    "FetchResult",
]
