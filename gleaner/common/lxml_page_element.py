"""LxmlPageElement implementation wrapping CheckedHtmlElement.

This module provides the implementation of the PageElement protocol used by
the record builder. It wraps CheckedHtmlElement, delegates count-checked
queries to it, and normalizes text the way the extractor expects.
"""

from __future__ import annotations

from lxml import etree, html

from gleaner.common.checked_html import CheckedHtmlElement
from gleaner.common.selector_utils import is_xpath
from gleaner.common.text_parsers import decode_cf_email, normalize_whitespace


class LxmlPageElement:
    """Implementation of PageElement protocol wrapping CheckedHtmlElement.

    Attributes:
        _element: The underlying CheckedHtmlElement.
        _url: The document URL, used for error context.
    """

    def __init__(self, element: CheckedHtmlElement, url: str = ""):
        """Initialize LxmlPageElement.

        Args:
            element: The CheckedHtmlElement to wrap.
            url: URL of the document, for error context.
        """
        self._element = element
        self._url = url

    @classmethod
    def from_html(
        cls, document: str | bytes, url: str = ""
    ) -> LxmlPageElement:
        """Parse a document and wrap its root element.

        An empty document parses to a bare ``<html>`` element, so selectors
        simply match nothing instead of raising a parser error. Addresses
        hidden by Cloudflare email protection are replaced with their
        decoded text.

        Args:
            document: HTML markup.
            url: URL of the document, for error context.

        Returns:
            LxmlPageElement wrapping the document root.
        """
        if isinstance(document, str) and document.lstrip().startswith("<?xml"):
            # lxml refuses str input carrying an encoding declaration
            document = document.encode("utf-8")

        try:
            root = html.document_fromstring(document)
        except etree.ParserError:
            root = html.document_fromstring("<html></html>")

        _decode_protected_emails(root)
        return cls(CheckedHtmlElement(root, url), url)

    @property
    def request_url(self) -> str:
        return self._url

    def _wrap(self, elements: list[CheckedHtmlElement]) -> list[LxmlPageElement]:
        return [LxmlPageElement(elem, self._url) for elem in elements]

    def query(
        self,
        selector: str,
        description: str,
        min_count: int = 1,
        max_count: int | None = None,
    ) -> list[LxmlPageElement]:
        """Query elements by XPath or CSS selector.

        Args:
            selector: XPath expression or CSS selector.
            description: Human-readable description of what's being selected.
            min_count: Minimum number of elements expected (default: 1).
            max_count: Maximum number of elements expected (None = unlimited).

        Returns:
            List of matching LxmlPageElement instances.

        Raises:
            HTMLStructuralAssumptionException: If count doesn't match expectations.
        """
        if is_xpath(selector):
            return self.query_xpath(selector, description, min_count, max_count)
        return self.query_css(selector, description, min_count, max_count)

    def query_xpath(
        self,
        selector: str,
        description: str,
        min_count: int = 1,
        max_count: int | None = None,
    ) -> list[LxmlPageElement]:
        """Query elements by XPath selector.

        Raises:
            HTMLStructuralAssumptionException: If count doesn't match expectations.
        """
        return self._wrap(
            self._element.checked_xpath(
                selector, description, min_count, max_count
            )
        )

    def query_xpath_strings(
        self,
        selector: str,
        description: str,
        min_count: int = 1,
        max_count: int | None = None,
    ) -> list[str]:
        """Query string values by XPath selector.

        Raises:
            HTMLStructuralAssumptionException: If count doesn't match expectations.
        """
        return self._element.checked_xpath(
            selector, description, min_count, max_count, type=str
        )

    def query_css(
        self,
        selector: str,
        description: str,
        min_count: int = 1,
        max_count: int | None = None,
    ) -> list[LxmlPageElement]:
        """Query elements by CSS selector.

        Raises:
            HTMLStructuralAssumptionException: If count doesn't match expectations.
        """
        return self._wrap(
            self._element.checked_css(
                selector, description, min_count, max_count
            )
        )

    def text_content(self) -> str:
        return normalize_whitespace(self._element.text_content())

    def own_text(self) -> str:
        texts = self.query_xpath_strings("text()", "own text", min_count=0)
        return normalize_whitespace("".join(texts))

    def get_attribute(self, name: str) -> str | None:
        return self._element.get(name)


def _decode_protected_emails(root: html.HtmlElement) -> None:
    """Replace each ``data-cfemail`` element with the address it hides."""
    for elem in root.xpath("//*[@data-cfemail]"):
        email = decode_cf_email(elem.get("data-cfemail"))
        if not email or elem.getparent() is None:
            continue
        previous = elem.getprevious()
        if previous is not None:
            previous.tail = (previous.tail or "") + email
        else:
            parent = elem.getparent()
            parent.text = (parent.text or "") + email
        # Keeps the tail text
        elem.drop_tree()
