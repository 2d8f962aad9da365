"""Tests for selector utility functions.

Tests is_xpath, selector_type and selects_strings.
"""

from gleaner.common.selector_utils import (
    is_xpath,
    selector_type,
    selects_strings,
)


class TestIsXpath:
    """Tests for is_xpath function."""

    def test_paths_are_xpath(self):
        """Absolute, relative and parenthesized paths shall be XPath."""
        assert is_xpath("//div[@id='Wrapper']") is True
        assert is_xpath("/html/body") is True
        assert is_xpath("./span") is True
        assert is_xpath(".//td/text()") is True
        assert is_xpath("../a") is True
        assert is_xpath("(//a)[1]") is True

    def test_css_selectors_are_not_xpath(self):
        """CSS selectors shall not be mistaken for XPath."""
        assert is_xpath("div#Wrapper") is False
        assert is_xpath("div.cell.item") is False
        assert is_xpath(".item_title") is False
        assert is_xpath('a[href^="/member"]') is False
        assert is_xpath("td > a") is False

    def test_leading_whitespace_is_ignored(self):
        """Leading whitespace shall not change the classification."""
        assert is_xpath("  //div") is True


def test_selector_type():
    """selector_type() shall name the selector kind."""
    assert selector_type("//div") == "xpath"
    assert selector_type("span.snow") == "css"


class TestSelectsStrings:
    """Tests for selects_strings function."""

    def test_text_node_xpath_selects_strings(self):
        """XPath ending in text() shall select strings."""
        assert selects_strings("//div/text()") is True
        assert selects_strings(".//span//text()") is True

    def test_attribute_xpath_selects_strings(self):
        """XPath ending in an attribute step shall select strings."""
        assert selects_strings("//a/@href") is True
        assert selects_strings(".//img[@class='avatar']/@src") is True

    def test_element_xpath_selects_elements(self):
        """XPath with attribute predicates only shall select elements."""
        assert selects_strings("//div") is False
        assert selects_strings("//a[@href]") is False
        assert selects_strings("//div[@class='cell item']") is False

    def test_css_never_selects_strings(self):
        """CSS selectors shall always select elements."""
        assert selects_strings("a.node") is False
        assert selects_strings("a[href]") is False
