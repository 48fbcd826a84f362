"""Tests for the Paste model expiry rules and timestamp helpers."""

import pytest

from app.core.clock import format_timestamp_ms, resolve_current_time_ms
from app.core.config import settings
from app.models.paste import MAX_TTL_SECONDS, MAX_VIEWS, Paste, PasteUpdate, normalize_limit


def make_paste(**kwargs) -> Paste:
    fields = {"id": "abcd1234", "content": "abc", "created_at": 1_000_000, "current_views": 0}
    fields.update(kwargs)
    return Paste(**fields)


class TestPasteExpiry:
    """Test suite for Paste.is_expired and the derived figures."""

    def test_no_policies_never_expire(self):
        paste = make_paste()

        assert paste.is_expired(10 ** 15) is False
        assert paste.expires_at_ms() is None
        assert paste.remaining_views() is None

    def test_ttl_is_strict(self):
        paste = make_paste(ttl_seconds=5)

        assert paste.is_expired(1_005_000) is False
        assert paste.is_expired(1_005_001) is True
        assert paste.expires_at_ms() == 1_005_000

    def test_view_limit(self):
        assert make_paste(max_views=2, current_views=1).is_expired(1_000_000) is False
        assert make_paste(max_views=2, current_views=2).is_expired(1_000_000) is True

    def test_remaining_views_never_negative(self):
        assert make_paste(max_views=3, current_views=1).remaining_views() == 2
        assert make_paste(max_views=3, current_views=5).remaining_views() == 0

    def test_update_rejects_negative_views(self):
        with pytest.raises(ValueError):
            PasteUpdate(current_views=-1)


class TestNormalizeLimit:
    """Test suite for the ttl_seconds and max_views bounds."""

    @pytest.mark.parametrize("value, expected", [(1, 1), (7.0, 7), (MAX_TTL_SECONDS, MAX_TTL_SECONDS)])
    def test_accepted_ttl(self, value, expected):
        result = normalize_limit("ttl_seconds", value)

        assert result == expected
        assert type(result) is int

    @pytest.mark.parametrize("value", [None, 0, True, 2.5, "3", MAX_TTL_SECONDS + 1])
    def test_rejected_ttl(self, value):
        with pytest.raises(ValueError, match="ttl_seconds must be an integer >= 1"):
            normalize_limit("ttl_seconds", value)

    def test_max_views_bound(self):
        assert normalize_limit("max_views", MAX_VIEWS) == MAX_VIEWS

        with pytest.raises(ValueError, match="max_views must be an integer >= 1"):
            normalize_limit("max_views", MAX_VIEWS + 1)

    def test_longest_ttl_formats(self):
        paste = make_paste(ttl_seconds=MAX_TTL_SECONDS)

        assert format_timestamp_ms(paste.expires_at_ms()).endswith("Z")


class TestClock:
    """Test suite for timestamp formatting and the overridable clock."""

    def test_format_timestamp(self):
        assert format_timestamp_ms(0) == "1970-01-01T00:00:00.000Z"
        assert format_timestamp_ms(1_700_000_000_123) == "2023-11-14T22:13:20.123Z"

    def test_header_honored_in_test_mode(self, monkeypatch):
        monkeypatch.setattr(settings, "TEST_MODE", True)

        assert resolve_current_time_ms("1234") == 1234

    def test_header_ignored_outside_test_mode(self, monkeypatch):
        monkeypatch.setattr(settings, "TEST_MODE", False)

        assert resolve_current_time_ms("1234") != 1234

    def test_invalid_header_falls_back_to_wall_clock(self, monkeypatch):
        monkeypatch.setattr(settings, "TEST_MODE", True)

        assert resolve_current_time_ms("not-a-number") > 1_600_000_000_000
