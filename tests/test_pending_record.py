"""Tests for PendingRecord."""

import pytest

from gleaner.common.exceptions import DataFormatAssumptionException
from gleaner.common.pending_record import PendingRecord
from gleaner.v2ex.models import MyTopicsPage, TopicItem


class TestPendingRecord:
    """Tests for PendingRecord."""

    def test_holds_values_and_model(self):
        """PendingRecord shall hold the values it was created with and its model."""
        pending = PendingRecord(
            TopicItem, "https://www.v2ex.com/my/topics", title="Hello"
        )

        assert pending.model_name == "TopicItem"
        assert pending.mapping_name is None
        assert pending.values == {"title": "Hello"}

    def test_set_adds_values(self):
        """PendingRecord.set() shall add values before validation."""
        pending = TopicItem.raw(title="Hello")
        pending.set("comment_count", 3)

        assert pending.values == {"title": "Hello", "comment_count": 3}

    def test_confirm_builds_record(self):
        """PendingRecord.confirm() shall return the validated record."""
        pending = TopicItem.raw(title="Hello", link="/t/1#reply0")
        pending.set("comment_count", 3)

        item = pending.confirm()

        assert isinstance(item, TopicItem)
        assert item.title == "Hello"
        assert item.comment_count == 3
        assert item.topic_id == "1"

    def test_confirm_reports_mapping_and_model(self):
        """A rejected value shall be reported with its mapping, model and field."""
        pending = MyTopicsPage.raw(
            "https://www.v2ex.com/my/topics",
            mapping_name="v2ex-my-topics",
            total="many",
            items=(),
        )

        with pytest.raises(DataFormatAssumptionException) as exc_info:
            pending.confirm()

        exc = exc_info.value
        assert exc.model_name == "MyTopicsPage"
        assert exc.mapping_name == "v2ex-my-topics"
        assert exc.request_url == "https://www.v2ex.com/my/topics"
        assert exc.failed_doc["total"] == "many"
        assert exc.invalid_fields == ("total",)
        assert "url" not in exc.errors[0]
        assert str(exc).startswith(
            "Mapping 'v2ex-my-topics' produced values MyTopicsPage rejects: total:"
        )

    def test_confirm_rejects_unknown_fields(self):
        """Records shall not accept fields their model doesn't declare."""
        pending = TopicItem.raw(author="alice")

        with pytest.raises(DataFormatAssumptionException) as exc_info:
            pending.confirm()

        assert exc_info.value.invalid_fields == ("author",)

    def test_values_returns_copy(self):
        """PendingRecord.values shall return a copy of the collected values."""
        pending = TopicItem.raw(title="Hello")

        pending.values["title"] = "Changed"

        assert pending.values["title"] == "Hello"

    def test_repr_names_model_mapping_and_fields(self):
        """The repr shall list the model, the mapping and the fields set so far."""
        pending = TopicItem.raw(mapping_name="v2ex-topic-item", title="Hello")

        assert repr(pending) == (
            "<PendingRecord TopicItem from 'v2ex-topic-item': title>"
        )
        assert repr(TopicItem.raw()) == "<PendingRecord TopicItem: no values>"
