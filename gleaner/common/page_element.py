"""PageElement protocol: the selector evaluator the extraction engine consumes.

This module provides a parser-agnostic interface for querying HTML elements
and reading their text and attributes. The record builder only talks to
this protocol; LxmlPageElement is the implementation shipped with the
package.
"""

from __future__ import annotations

from typing import Protocol


class PageElement(Protocol):
    """Protocol for data extraction from a scope of an HTML document.

    All query methods support count validation and raise
    HTMLStructuralAssumptionException if the actual count doesn't match
    expectations.
    """

    @property
    def request_url(self) -> str:
        """URL of the document this element belongs to, for error context."""
        ...

    def query(
        self,
        selector: str,
        description: str,
        min_count: int = 1,
        max_count: int | None = None,
    ) -> list[PageElement]:
        """Query elements by XPath or CSS selector, whichever the selector is.

        Args:
            selector: XPath expression or CSS selector.
            description: Human-readable description of what's being selected.
            min_count: Minimum number of elements expected (default: 1).
            max_count: Maximum number of elements expected (None = unlimited).

        Returns:
            List of matching PageElement instances in document order.

        Raises:
            HTMLStructuralAssumptionException: If count doesn't match expectations.
        """
        ...

    def query_xpath(
        self,
        selector: str,
        description: str,
        min_count: int = 1,
        max_count: int | None = None,
    ) -> list[PageElement]:
        """Query elements by XPath selector."""
        ...

    def query_xpath_strings(
        self,
        selector: str,
        description: str,
        min_count: int = 1,
        max_count: int | None = None,
    ) -> list[str]:
        """Query string values (text nodes, attributes) by XPath selector."""
        ...

    def query_css(
        self,
        selector: str,
        description: str,
        min_count: int = 1,
        max_count: int | None = None,
    ) -> list[PageElement]:
        """Query elements by CSS selector."""
        ...

    def text_content(self) -> str:
        """Extract the text content of the element and its descendants.

        Returns:
            Whitespace-normalized text.
        """
        ...

    def own_text(self) -> str:
        """Extract only the text nodes owned directly by the element.

        Text inside descendant elements is excluded.

        Returns:
            Whitespace-normalized text.
        """
        ...

    def get_attribute(self, name: str) -> str | None:
        """Extract an attribute value.

        Args:
            name: Name of the attribute.

        Returns:
            Value of the attribute, or None if it doesn't exist.
        """
        ...
