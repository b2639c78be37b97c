"""Tests for the content store service."""

import pytest
from pydantic import ValidationError
from sqlalchemy.exc import OperationalError

from calcsite.database import create_tables
from calcsite.services.content_defaults import DEFAULT_PAGE_CONTENT
from calcsite.services.content_service import (
    ContentConflictError,
    ContentIntegrityError,
    ContentNotFoundError,
    ContentService,
    FaqCreate,
    FaqUpdate,
    SeoContentCreate,
    SeoContentUpdate,
)


@pytest.fixture
def service(app_env):
    create_tables()
    return ContentService()


def unavailable_session():
    raise OperationalError("SELECT 1", {}, Exception("connection refused"))


class TestPageContent:
    """Test cases for get_page_content()."""

    def test_default_when_store_empty(self, service):
        content = service.get_page_content("auto_loan_essay")

        assert content.source == "default"
        assert content.title == DEFAULT_PAGE_CONTENT["auto_loan_essay"].title

    def test_store_record_preferred(self, service):
        service.create_content(
            SeoContentCreate(
                id="auto_loan_essay", title="Custom", content="Custom essay body"
            )
        )

        content = service.get_page_content("auto_loan_essay")

        assert content.source == "store"
        assert content.title == "Custom"
        assert content.content == "Custom essay body"

    def test_default_when_store_unavailable(self):
        """An unreachable store still serves the default essay."""
        service = ContentService(session_factory=unavailable_session)

        content = service.get_page_content("roi_essay")

        assert content.source == "default"
        assert content.content == DEFAULT_PAGE_CONTENT["roi_essay"].content

    def test_unknown_key(self, service):
        assert service.get_page_content("no_such_essay") is None

    def test_every_default_is_complete(self):
        for key, default in DEFAULT_PAGE_CONTENT.items():
            assert key.endswith("_essay")
            assert default.title
            assert default.content


class TestSeoContentCrud:
    """Test cases for content record CRUD."""

    def test_create_and_get(self, service):
        created = service.create_content(
            SeoContentCreate(id="ppp_essay", title="PPP", content="Body", keywords="ppp")
        )

        assert created["id"] == "ppp_essay"
        assert service.get_content("ppp_essay")["keywords"] == "ppp"
        assert [record["id"] for record in service.list_content()] == ["ppp_essay"]

    def test_create_duplicate(self, service):
        data = SeoContentCreate(id="ppp_essay", title="PPP", content="Body")
        service.create_content(data)

        with pytest.raises(ContentConflictError):
            service.create_content(data)

    def test_update(self, service):
        service.create_content(SeoContentCreate(id="ppp_essay", title="PPP", content="Body"))

        updated = service.update_content("ppp_essay", SeoContentUpdate(title="New title"))

        assert updated["title"] == "New title"
        assert updated["content"] == "Body"

    def test_delete(self, service):
        service.create_content(SeoContentCreate(id="ppp_essay", title="PPP", content="Body"))

        service.delete_content("ppp_essay")

        with pytest.raises(ContentNotFoundError):
            service.get_content("ppp_essay")

    def test_update_rejects_null_required_fields(self):
        with pytest.raises(ValidationError):
            SeoContentUpdate(title=None)
        with pytest.raises(ValidationError):
            SeoContentUpdate.model_validate({"content": None})

    def test_update_allows_null_optional_fields(self):
        update = SeoContentUpdate(meta_description=None)

        assert update.model_dump(exclude_unset=True) == {"meta_description": None}

    def test_rejected_update_rolls_back(self, service):
        """A write the store refuses leaves the stored record unchanged."""
        service.create_content(SeoContentCreate(id="ppp_essay", title="PPP", content="Body"))
        unchecked = SeoContentUpdate.model_construct(title=None)

        with pytest.raises(ContentIntegrityError):
            service.update_content("ppp_essay", unchecked)

        assert service.get_content("ppp_essay")["title"] == "PPP"

    def test_missing_record(self, service):
        with pytest.raises(ContentNotFoundError):
            service.update_content("missing", SeoContentUpdate(title="x"))
        with pytest.raises(ContentNotFoundError):
            service.delete_content("missing")


class TestFaqs:
    """Test cases for FAQ management."""

    def test_list_in_display_order(self, service):
        service.create_faq(FaqCreate(question="Second?", answer="B", sort_order=2))
        service.create_faq(FaqCreate(question="First?", answer="A", sort_order=1))

        faqs = service.list_faqs()

        assert [faq["question"] for faq in faqs] == ["First?", "Second?"]

    def test_filter_by_category(self, service):
        service.create_faq(FaqCreate(question="Loan?", answer="A", category="loans"))
        service.create_faq(FaqCreate(question="General?", answer="B"))

        faqs = service.list_faqs("loans")

        assert [faq["question"] for faq in faqs] == ["Loan?"]

    def test_update_and_delete(self, service):
        faq = service.create_faq(FaqCreate(question="Q?", answer="A"))

        updated = service.update_faq(faq["id"], FaqUpdate(answer="Better answer"))
        assert updated["answer"] == "Better answer"

        service.delete_faq(faq["id"])
        assert service.list_faqs() == []

    def test_missing_faq(self, service):
        with pytest.raises(ContentNotFoundError):
            service.update_faq(999, FaqUpdate(answer="x"))

    def test_update_rejects_null_required_fields(self):
        for field in ("question", "answer", "category", "sort_order"):
            with pytest.raises(ValidationError):
                FaqUpdate.model_validate({field: None})

    def test_rejected_update_rolls_back(self, service):
        faq = service.create_faq(FaqCreate(question="Q?", answer="A"))
        unchecked = FaqUpdate.model_construct(answer=None)

        with pytest.raises(ContentIntegrityError):
            service.update_faq(faq["id"], unchecked)

        assert [f["answer"] for f in service.list_faqs()] == ["A"]
