"""
Tests for review and support ticket schemas.
"""

import pytest
from pydantic import ValidationError

from api.schemas.reviews import ReviewCreate
from api.schemas.tickets import TicketCreate, TicketUpdate
from database.models.tickets import TicketPriority, TicketStatus


def field_messages(exc: ValidationError, field: str) -> list[str]:
    return [e["msg"] for e in exc.errors() if e["loc"] and e["loc"][0] == field]


def review(**overrides) -> ReviewCreate:
    return ReviewCreate(**{"contract_id": 1, "reviewer_id": 2, "reviewee_id": 3, "rating": 4, **overrides})


def ticket(**overrides) -> TicketCreate:
    data = {
        "user_id": 1,
        "subject": "Payment missing",
        "description": "The company marked my contract as paid.",
    }
    return TicketCreate(**{**data, **overrides})


class TestReviewCreate:
    @pytest.mark.parametrize("rating,message", [
        (0, "Rating must be at least 1"),
        (6, "Rating cannot exceed 5"),
    ])
    def test_rating_range(self, rating, message):
        with pytest.raises(ValidationError) as exc_info:
            review(rating=rating)
        assert any(message in m for m in field_messages(exc_info.value, "rating"))

    @pytest.mark.parametrize("rating", [1, 5])
    def test_rating_bounds_inclusive(self, rating):
        assert review(rating=rating).rating == rating

    def test_fractional_rating_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            review(rating=4.5)
        assert any("Rating must be an integer" in m for m in field_messages(exc_info.value, "rating"))

    def test_comment_trimmed_and_bounded(self):
        assert review(comment="  Great work  ").comment == "Great work"
        with pytest.raises(ValidationError) as exc_info:
            review(comment="x" * 2001)
        assert any("Comment cannot exceed 2000 characters" in m for m in field_messages(exc_info.value, "comment"))


class TestTicketCreate:
    def test_defaults(self):
        created = ticket()
        assert created.status == TicketStatus.OPEN
        assert created.priority == TicketPriority.MEDIUM

    @pytest.mark.parametrize("subject,message", [
        ("  Hi  ", "Subject must be at least 5 characters"),
        ("x" * 201, "Subject cannot exceed 200 characters"),
    ])
    def test_subject_length(self, subject, message):
        with pytest.raises(ValidationError) as exc_info:
            ticket(subject=subject)
        assert any(message in m for m in field_messages(exc_info.value, "subject"))

    @pytest.mark.parametrize("description,message", [
        ("too short", "Description must be at least 10 characters"),
        ("x" * 5001, "Description cannot exceed 5000 characters"),
    ])
    def test_description_length(self, description, message):
        with pytest.raises(ValidationError) as exc_info:
            ticket(description=description)
        assert any(message in m for m in field_messages(exc_info.value, "description"))

    def test_update_fields_optional(self):
        assert TicketUpdate(status="RESOLVED").priority is None
