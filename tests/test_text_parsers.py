"""Tests for the derived-field micro-parsers."""

import pytest

from gleaner.common.text_parsers import (
    decode_cf_email,
    extract_leading_int,
    extract_tag_name,
    extract_time_phrase,
    extract_topic_id,
    extract_username,
    normalize_whitespace,
    slice_after,
    slice_between,
    strip_whitespace,
)


class TestTopicId:
    """Tests for extract_topic_id."""

    def test_extracts_id_before_fragment(self):
        """The topic id shall be the text between /t/ and #."""
        assert extract_topic_id("/t/12345#reply10") == "12345"

    def test_absolute_link(self):
        """Absolute topic links shall work like relative ones."""
        assert extract_topic_id("https://www.v2ex.com/t/42#reply1") == "42"

    @pytest.mark.parametrize("link", ["", None, "/t/12345", "/member/alice"])
    def test_missing_delimiters_give_empty_string(self, link):
        """A link missing either delimiter shall give an empty id."""
        assert extract_topic_id(link) == ""


class TestTagName:
    """Tests for extract_tag_name."""

    def test_extracts_name_after_prefix(self):
        """The tag name shall be the text after /go/."""
        assert extract_tag_name("/go/programming") == "programming"

    @pytest.mark.parametrize("link", ["", None, "/t/1#reply0"])
    def test_missing_prefix_gives_empty_string(self, link):
        """A link without /go/ shall give an empty tag name."""
        assert extract_tag_name(link) == ""


class TestUsername:
    """Tests for extract_username."""

    def test_extracts_last_path_segment(self):
        """The username shall be the last path segment of the profile link."""
        assert extract_username("/member/alice") == "alice"
        assert extract_username("https://www.v2ex.com/member/bob") == "bob"

    def test_empty_link_is_unknown(self):
        """An empty link shall give None."""
        assert extract_username("") is None
        assert extract_username(None) is None

    def test_trailing_slash_gives_empty_string(self):
        """A link ending in / shall give an empty username."""
        assert extract_username("/member/") == ""

    def test_link_without_slash(self):
        """A bare name shall be returned unchanged."""
        assert extract_username("alice") == "alice"


class TestTimePhrase:
    """Tests for extract_time_phrase."""

    def test_extracts_compacted_phrase(self):
        """The phrase ending in the marker shall be returned without spaces."""
        assert extract_time_phrase("•  36 天前  •  最后回复来自") == "36天前"

    def test_multi_unit_phrase(self):
        """Phrases with several units shall be kept whole."""
        assert extract_time_phrase("• • 2 小时 5 分钟前") == "2小时5分钟前"

    def test_phrase_without_separator(self):
        """A line without separators shall yield the phrase."""
        assert extract_time_phrase("1 天前") == "1天前"

    def test_nbsp_is_removed(self):
        """Non-breaking spaces shall be stripped like other whitespace."""
        assert extract_time_phrase("\u00a0•\u00a03 小时前\u00a0•") == "3小时前"

    @pytest.mark.parametrize("text", ["", None, "• 最后回复来自 •"])
    def test_missing_marker_gives_empty_string(self, text):
        """A line without the marker shall give an empty phrase."""
        assert extract_time_phrase(text) == ""

    def test_custom_marker_and_separator(self):
        """The marker and separator shall be configurable."""
        assert (
            extract_time_phrase("posted | 5 min ago | by bob", "ago", "|")
            == "5minago"
        )


class TestSlicing:
    """Tests for the slicing helpers."""

    def test_slice_after_first_occurrence(self):
        """slice_after() shall cut at the first occurrence of the prefix."""
        assert slice_after("n_n_1", "n_") == "n_1"

    def test_slice_after_empty_tail(self):
        """A prefix at the end shall give an empty string."""
        assert slice_after("/go/", "/go/") == ""

    def test_slice_between_requires_end(self):
        """slice_between() shall need both delimiters."""
        assert slice_between("/t/1#", "/t/", "#") == "1"
        assert slice_between("/t/1", "/t/", "#") == ""


class TestLeadingInt:
    """Tests for extract_leading_int."""

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("2 条未读提醒", 2),
            ("  15 条未读提醒", 15),
            ("0 条未读提醒", 0),
            ("没有未读提醒", 0),
            ("", 0),
            (None, 0),
        ],
    )
    def test_leading_count(self, text, expected):
        """The number a label starts with shall be returned, otherwise 0."""
        assert extract_leading_int(text) == expected


class TestDecodeCfEmail:
    """Tests for decode_cf_email."""

    def test_decodes_address(self):
        """Each byte after the key shall be XORed with the key."""
        assert decode_cf_email("422302206c212d") == "a@b.co"

    def test_upper_case_hex(self):
        """Upper-case hex shall decode the same."""
        assert decode_cf_email("422302206C212D") == "a@b.co"

    @pytest.mark.parametrize("encoded", ["", None, "zz", "422", "42"])
    def test_malformed_value_gives_empty_string(self, encoded):
        """Values that are not hex, or hold only a key, shall decode to ""."""
        assert decode_cf_email(encoded) == ""


def test_normalize_whitespace():
    """normalize_whitespace() shall collapse runs and trim the ends."""
    assert normalize_whitespace("  a \n\t b  c ") == "a b c"
    assert normalize_whitespace("") == ""


def test_strip_whitespace():
    """strip_whitespace() shall remove every whitespace character."""
    assert strip_whitespace(" 36 天 前 ") == "36天前"
