"""Database models and configuration for the content store."""

from .base import (
    Base,
    SessionFactory,
    create_tables,
    get_engine,
    get_session,
    reset_engine,
    session_scope,
)
from .models import Faq, SeoContent

__all__ = [
    "Base",
    "SessionFactory",
    "create_tables",
    "get_engine",
    "get_session",
    "reset_engine",
    "session_scope",
    "Faq",
    "SeoContent",
]
