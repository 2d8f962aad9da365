"""Selector utility functions.

This module tells CSS selectors from XPath expressions and classifies XPath
expressions that produce strings rather than elements, so mapping
descriptions can mix both selector languages.
"""


def is_xpath(selector: str) -> bool:
    """Determine whether a selector is an XPath expression.

    XPath expressions in mapping descriptions are written as absolute or
    relative paths (``//``, ``./``, ``..``) or as parenthesized expressions.
    Everything else is treated as CSS, including class selectors such as
    ``.item_title``.

    Examples:
        >>> is_xpath("//div[@id='Wrapper']")
        True
        >>> is_xpath(".//span/text()")
        True
        >>> is_xpath("(//a)[1]")
        True
        >>> is_xpath("div.cell.item")
        False
        >>> is_xpath(".item_title")
        False
    """
    selector = selector.strip()
    return selector.startswith(("/", "./", "..", "("))


def selector_type(selector: str) -> str:
    """Return ``"xpath"`` or ``"css"`` for a selector."""
    return "xpath" if is_xpath(selector) else "css"


def selects_strings(selector: str) -> bool:
    """Determine if an XPath expression selects strings instead of elements.

    Text node and attribute selections return strings from lxml. CSS
    selectors always target elements.

    Args:
        selector: The selector string.

    Returns:
        True if the expression selects text nodes or attribute values.

    Examples:
        >>> selects_strings("//span[@class='item_title']/a/@href")
        True
        >>> selects_strings(".//td/text()")
        True
        >>> selects_strings("//div[@class='cell item']")
        False
        >>> selects_strings("a.node")
        False
    """
    if not is_xpath(selector):
        return False

    selector = selector.strip()

    if selector.endswith("text()"):
        return True

    # Simple heuristic: if the last step is /@something, it's an attribute
    if "@" in selector:
        parts = selector.split("/")
        if parts and parts[-1].startswith("@"):
            return True

    return False
