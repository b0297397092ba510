"""Unit tests for list options."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from kong_admin.listing import ListOptions


class TestListOptions:
    """Tests for ListOptions encoding and paging."""

    @pytest.mark.unit
    def test_defaults_encode_to_empty_query(self) -> None:
        """Default options should not add any query parameter."""
        assert ListOptions().to_query() == {}

    @pytest.mark.unit
    def test_size_and_offset(self) -> None:
        """Size and offset should be sent when set."""
        opts = ListOptions(size=10, offset="abc")

        assert opts.to_query() == {"size": 10, "offset": "abc"}

    @pytest.mark.unit
    def test_tags_or_semantics(self) -> None:
        """Tags should be joined with '/' for OR matching."""
        opts = ListOptions(tags=["foo", "bar"])

        assert opts.to_query() == {"tags": "foo/bar"}

    @pytest.mark.unit
    def test_tags_and_semantics(self) -> None:
        """Tags should be joined with ',' for AND matching."""
        opts = ListOptions(tags=["foo", "bar"], match_all_tags=True)

        assert opts.to_query() == {"tags": "foo,bar"}

    @pytest.mark.unit
    def test_duplicate_tags_removed(self) -> None:
        """Repeated tags should be sent once, keeping first-seen order."""
        opts = ListOptions(tags=["b", "a", "b", "a"])

        assert opts.tags == ("b", "a")

    @pytest.mark.unit
    def test_negative_size_rejected(self) -> None:
        """Page size cannot be negative."""
        with pytest.raises(ValidationError):
            ListOptions(size=-1)

    @pytest.mark.unit
    def test_next_page_keeps_size_and_tags(self) -> None:
        """The next page should reuse size and tag filter with the new cursor."""
        opts = ListOptions(size=1, tags=["foo"], match_all_tags=True)

        next_opts = opts.next_page("cursor-2")

        assert next_opts is not None
        assert next_opts.offset == "cursor-2"
        assert next_opts.size == 1
        assert next_opts.tags == ("foo",)
        assert next_opts.match_all_tags is True
        assert opts.offset == ""

    @pytest.mark.unit
    @pytest.mark.parametrize("offset", [None, ""])
    def test_next_page_none_when_exhausted(self, offset: str | None) -> None:
        """No cursor means iteration is over."""
        assert ListOptions(size=5).next_page(offset) is None
