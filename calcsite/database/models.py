"""
SQLAlchemy database models for the content store.

Calculator pages read essays from ``seo_content`` by key (for example
``auto_loan_essay``) and FAQ entries from ``faqs``; the admin surface edits
both.
"""

from datetime import datetime
from typing import Any, Dict

from sqlalchemy import Column, DateTime, Index, Integer, String, Text

from .base import Base


class SeoContent(Base):
    """Long-form page content keyed by a stable string id."""

    __tablename__ = "seo_content"

    id = Column(String(100), primary_key=True)
    title = Column(String(255), nullable=False)
    content = Column(Text, nullable=False)
    meta_description = Column(Text)
    keywords = Column(Text)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False
    )

    __table_args__ = (Index("idx_seo_content_updated", "updated_at"),)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "content": self.content,
            "meta_description": self.meta_description,
            "keywords": self.keywords,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }

    def __repr__(self):
        return f"<SeoContent(id='{self.id}', title='{self.title}')>"


class Faq(Base):
    """Frequently asked question shown on calculator pages."""

    __tablename__ = "faqs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    question = Column(Text, nullable=False)
    answer = Column(Text, nullable=False)
    category = Column(String(100), nullable=False, default="general", index=True)
    sort_order = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False
    )

    __table_args__ = (Index("idx_faqs_category_order", "category", "sort_order"),)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "question": self.question,
            "answer": self.answer,
            "category": self.category,
            "sort_order": self.sort_order,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }

    def __repr__(self):
        return f"<Faq(id={self.id}, category='{self.category}')>"
