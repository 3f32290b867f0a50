"""Tests for epic_timelines.data.models: value types."""

from dataclasses import FrozenInstanceError, asdict
from datetime import datetime

import pytest

from epic_timelines.data.models import DEFAULT_EPIC_COLOR, CalendarEvent, Epic


def test_event_optional_fields_default_to_none():
    event = CalendarEvent(
        id="id1", title="Review",
        start=datetime(2025, 9, 22, 8), end=datetime(2025, 9, 22, 9),
    )
    assert event.description is None
    assert event.location is None


def test_event_is_immutable():
    event = CalendarEvent(
        id="id1", title="Review",
        start=datetime(2025, 9, 22, 8), end=datetime(2025, 9, 22, 9),
    )
    with pytest.raises(FrozenInstanceError):
        event.title = "Changed"


def test_epic_defaults():
    epic = Epic(name="Work", keyword="work")
    assert epic.case_sensitive is False
    assert epic.match_title is True
    assert epic.match_description is True
    assert epic.match_location is False
    assert epic.color == DEFAULT_EPIC_COLOR


def test_epic_serializable():
    d = asdict(Epic(name="Work", keyword="work", color="#000000"))
    assert d["name"] == "Work"
    assert d["color"] == "#000000"
