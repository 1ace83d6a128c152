"""
Tests for validation and formatting helpers.
"""

import pytest

from core.utils.formatting import format_uptime, round_rating
from core.utils.validators import (
    normalize_email,
    normalize_skills,
    split_skills,
    validate_email,
    validate_password_strength,
)


class TestValidators:
    def test_normalize_email(self):
        assert normalize_email("  Asha@Example.COM ") == "asha@example.com"

    def test_validate_email(self):
        assert validate_email("asha@example.com")[0] is True
        assert validate_email("asha@")[0] is False

    def test_password_errors_in_order(self):
        valid, errors = validate_password_strength("abc")
        assert valid is False
        assert errors[0] == "Password must be at least 8 characters"
        assert len(errors) == 2

    @pytest.mark.parametrize("skills,expected", [
        (None, None),
        ("", None),
        ("Catering,  Bartending ,", "Catering, Bartending"),
        (["Photography", "photography", "Videography"], "Photography, Videography"),
    ])
    def test_normalize_skills(self, skills, expected):
        assert normalize_skills(skills) == expected

    def test_split_skills(self):
        assert split_skills("Catering, Bartending") == ["Catering", "Bartending"]
        assert split_skills(None) == []


class TestFormatting:
    @pytest.mark.parametrize("seconds,expected", [
        (0, "0d 0h 0m 0s"),
        (59.9, "0d 0h 0m 59s"),
        (93784, "1d 2h 3m 4s"),
        (-5, "0d 0h 0m 0s"),
    ])
    def test_format_uptime(self, seconds, expected):
        assert format_uptime(seconds) == expected

    @pytest.mark.parametrize("value,expected", [(None, 0.0), (4.25, 4.2), (3.666, 3.7), (5, 5.0)])
    def test_round_rating(self, value, expected):
        assert round_rating(value) == expected
