"""
Content store access for calculator pages and the admin surface.

Pages read essays through ``get_page_content``, which never fails: when the
store has no record or cannot be reached, the page's default content is
served instead. Admin CRUD operations raise ContentError subclasses.
"""

import logging
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field, field_validator
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from calcsite.database.base import SessionFactory, get_session, session_scope
from calcsite.database.models import Faq, SeoContent

from .content_defaults import DEFAULT_PAGE_CONTENT

logger = logging.getLogger(__name__)


class ContentError(Exception):
    """Base exception for content store errors."""


class ContentNotFoundError(ContentError):
    """Raised when a content record does not exist."""


class ContentConflictError(ContentError):
    """Raised when creating a record whose id already exists."""


class ContentIntegrityError(ContentError):
    """Raised when the store rejects a write that breaks a column constraint."""


class PageContent(BaseModel):
    """Essay content served to a calculator page."""

    id: str
    title: str
    content: str
    meta_description: Optional[str] = None
    source: Literal["store", "default"] = Field(
        ..., description="Whether the content came from the store or the defaults"
    )


class SeoContentCreate(BaseModel):
    id: str = Field(..., min_length=1, max_length=100)
    title: str = Field(..., min_length=1, max_length=255)
    content: str = Field(..., min_length=1)
    meta_description: Optional[str] = None
    keywords: Optional[str] = None


class SeoContentUpdate(BaseModel):
    """Partial update; omitted fields keep their stored value."""

    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    content: Optional[str] = Field(default=None, min_length=1)
    meta_description: Optional[str] = None
    keywords: Optional[str] = None

    @field_validator("title", "content", mode="before")
    @classmethod
    def reject_null(cls, v: Any) -> Any:
        """Title and content are required columns; omit them to keep the stored value."""
        if v is None:
            raise ValueError("Field cannot be null")
        return v


class FaqCreate(BaseModel):
    question: str = Field(..., min_length=1)
    answer: str = Field(..., min_length=1)
    category: str = Field(default="general", min_length=1, max_length=100)
    sort_order: int = Field(default=0)


class FaqUpdate(BaseModel):
    """Partial update; omitted fields keep their stored value."""

    question: Optional[str] = Field(default=None, min_length=1)
    answer: Optional[str] = Field(default=None, min_length=1)
    category: Optional[str] = Field(default=None, min_length=1, max_length=100)
    sort_order: Optional[int] = None

    @field_validator("question", "answer", "category", "sort_order", mode="before")
    @classmethod
    def reject_null(cls, v: Any) -> Any:
        if v is None:
            raise ValueError("Field cannot be null")
        return v


class ContentService:
    """Service for reading and editing page content and FAQs."""

    def __init__(self, session_factory: Optional[SessionFactory] = None) -> None:
        """Initialize the content service.

        Args:
            session_factory: Callable returning a new session; defaults to the
                application's database session
        """
        self.session_factory = session_factory or get_session

    def get_page_content(self, key: str) -> Optional[PageContent]:
        """Get a page's essay, falling back to its default content.

        Args:
            key: Content id, e.g. ``auto_loan_essay``

        Returns:
            PageContent from the store or the defaults, or None when the key
            has neither
        """
        try:
            with session_scope(self.session_factory) as session:
                record = session.get(SeoContent, key)
                if record is not None and record.content:
                    return PageContent(
                        id=record.id,
                        title=record.title,
                        content=record.content,
                        meta_description=record.meta_description,
                        source="store",
                    )
        except SQLAlchemyError as e:
            logger.warning(f"Content store unavailable for {key}, using default: {e}")

        default = DEFAULT_PAGE_CONTENT.get(key)
        if default is None:
            return None

        logger.info(f"Serving default content for {key}")
        return PageContent(
            id=key, title=default.title, content=default.content, source="default"
        )

    def list_content(self) -> List[Dict[str, Any]]:
        """List all content records, most recently updated first."""
        with session_scope(self.session_factory) as session:
            records = (
                session.query(SeoContent).order_by(SeoContent.updated_at.desc()).all()
            )
            return [record.to_dict() for record in records]

    def get_content(self, content_id: str) -> Dict[str, Any]:
        """Get a single content record.

        Raises:
            ContentNotFoundError: If no record has this id
        """
        with session_scope(self.session_factory) as session:
            return self._get_record(session, content_id).to_dict()

    def create_content(self, data: SeoContentCreate) -> Dict[str, Any]:
        """Create a content record.

        Raises:
            ContentConflictError: If a record with the id already exists
        """
        try:
            with session_scope(self.session_factory) as session:
                if session.get(SeoContent, data.id) is not None:
                    raise ContentConflictError(f"Content already exists: {data.id}")

                record = SeoContent(**data.model_dump())
                session.add(record)
                session.flush()
                created = record.to_dict()
        except IntegrityError as e:
            raise ContentConflictError(f"Content already exists: {data.id}") from e

        logger.info(f"Created content {data.id}")
        return created

    def update_content(self, content_id: str, data: SeoContentUpdate) -> Dict[str, Any]:
        """Update fields of a content record.

        Raises:
            ContentNotFoundError: If no record has this id
            ContentIntegrityError: If the store rejects the new values
        """
        try:
            with session_scope(self.session_factory) as session:
                record = self._get_record(session, content_id)
                for field, value in data.model_dump(exclude_unset=True).items():
                    setattr(record, field, value)
                session.flush()
                updated = record.to_dict()
        except IntegrityError as e:
            raise ContentIntegrityError(f"Invalid content update: {e.orig}") from e

        logger.info(f"Updated content {content_id}")
        return updated

    def delete_content(self, content_id: str) -> None:
        """Delete a content record.

        Raises:
            ContentNotFoundError: If no record has this id
        """
        with session_scope(self.session_factory) as session:
            session.delete(self._get_record(session, content_id))
        logger.info(f"Deleted content {content_id}")

    def list_faqs(self, category: Optional[str] = None) -> List[Dict[str, Any]]:
        """List FAQs ordered for display, optionally for one category."""
        with session_scope(self.session_factory) as session:
            query = session.query(Faq)
            if category is not None:
                query = query.filter(Faq.category == category)
            faqs = query.order_by(Faq.sort_order, Faq.id).all()
            return [faq.to_dict() for faq in faqs]

    def create_faq(self, data: FaqCreate) -> Dict[str, Any]:
        with session_scope(self.session_factory) as session:
            faq = Faq(**data.model_dump())
            session.add(faq)
            session.flush()
            created = faq.to_dict()
        logger.info(f"Created FAQ {created['id']}")
        return created

    def update_faq(self, faq_id: int, data: FaqUpdate) -> Dict[str, Any]:
        """Update fields of a FAQ.

        Raises:
            ContentNotFoundError: If no FAQ has this id
            ContentIntegrityError: If the store rejects the new values
        """
        try:
            with session_scope(self.session_factory) as session:
                faq = self._get_faq(session, faq_id)
                for field, value in data.model_dump(exclude_unset=True).items():
                    setattr(faq, field, value)
                session.flush()
                return faq.to_dict()
        except IntegrityError as e:
            raise ContentIntegrityError(f"Invalid FAQ update: {e.orig}") from e

    def delete_faq(self, faq_id: int) -> None:
        with session_scope(self.session_factory) as session:
            session.delete(self._get_faq(session, faq_id))
        logger.info(f"Deleted FAQ {faq_id}")

    @staticmethod
    def _get_record(session, content_id: str) -> SeoContent:
        record = session.get(SeoContent, content_id)
        if record is None:
            raise ContentNotFoundError(f"Content not found: {content_id}")
        return record

    @staticmethod
    def _get_faq(session, faq_id: int) -> Faq:
        faq = session.get(Faq, faq_id)
        if faq is None:
            raise ContentNotFoundError(f"FAQ not found: {faq_id}")
        return faq
