"""Unit tests for core/format.py"""

import pytest

from mdmemory.core.format import (
    format_field_list, format_generic_item, format_key_name, format_star_rating,
)


@pytest.mark.parametrize("key,expected", [
    ("start_date", "Start Date"),
    ("follow-up", "Follow Up"),
    ("status", "Status"),
])
def test_format_key_name(key, expected):
    assert format_key_name(key) == expected


def test_format_field_list_skips_empty_values():
    assert format_field_list({"role": "SRE", "notes": "", "next_step": "Call"}) == \
        "- **Role**: SRE\n- **Next Step**: Call\n"


@pytest.mark.parametrize("rating,expected", [
    (3, " ⭐⭐⭐"),
    ("5 stars", " ⭐⭐⭐⭐⭐"),
    (0, ""),
    (7, ""),
    ("great", ""),
    (None, ""),
])
def test_format_star_rating(rating, expected):
    assert format_star_rating(rating) == expected


def test_format_generic_item_string():
    assert format_generic_item("Call Jane") == "- Call Jane"


def test_format_generic_item_titled_mapping():
    """A title field becomes a '### ' heading; title and rating fields are not repeated."""
    item = {"company": "Acme", "role": "Staff Engineer", "rating": 4, "status": "Applied"}
    assert format_generic_item(item) == \
        "### Acme ⭐⭐⭐⭐\n- **Role**: Staff Engineer\n- **Status**: Applied\n"


def test_format_generic_item_title_precedence():
    item = {"title": "Second", "name": "First"}
    assert format_generic_item(item).startswith("### First\n")


def test_format_generic_item_untitled_mapping():
    assert format_generic_item({"when": "Friday", "what": ""}) == "- **When**: Friday\n"
