"""Field extraction and record building.

extract() is the entry point: it parses an HTML document and builds the
record a mapping description declares. Scalar fields never fail; a missing
element or a malformed integer degrades to the field's zero value so that
pages with optional or evolving markup still yield partial records. A root
selector that matches nothing is the one fatal condition.
"""

from __future__ import annotations

import logging
import re

from gleaner.common.exceptions import (
    HTMLStructuralAssumptionException,
    RootNotFoundException,
)
from gleaner.common.lxml_page_element import LxmlPageElement
from gleaner.common.page_element import PageElement
from gleaner.common.selector_utils import selector_type, selects_strings
from gleaner.mapping import AttrMode, FieldSpec, MappingDescription
from gleaner.record import Record

logger = logging.getLogger(__name__)

_INTEGER = re.compile(r"[+-]?[0-9]+")


def _first_raw_value(scope: PageElement, spec: FieldSpec) -> str | None:
    """Resolve a field to its raw string, or None if nothing matched."""
    if spec.selector and selects_strings(spec.selector):
        strings = scope.query_xpath_strings(
            spec.selector, spec.name, min_count=0
        )
        return strings[0] if strings else None

    if spec.selector:
        matches = scope.query(spec.selector, spec.name, min_count=0)
        if not matches:
            return None
        element = matches[0]
    else:
        element = scope

    if spec.mode is AttrMode.ATTRIBUTE:
        return element.get_attribute(spec.attr) or ""
    if spec.mode is AttrMode.OWN_TEXT:
        return element.own_text()
    return element.text_content()


def coerce_int(raw: str, field_name: str = "") -> int:
    """Parse an optionally signed run of ASCII digits, degrading anything else to 0.

    Stricter than ``int()``: digit separators ("1_000"), non-ASCII digits
    and embedded whitespace are malformed.
    """
    text = raw.strip()
    if _INTEGER.fullmatch(text):
        return int(text)
    logger.debug(
        "Field %s: could not coerce %r to int, using 0", field_name, raw
    )
    return 0


def extract_field(scope: PageElement, spec: FieldSpec) -> str | int:
    """Extract one declared field from a scope.

    Args:
        scope: The root or child scope to evaluate the selector against.
        spec: The field binding.

    Returns:
        The value coerced to ``spec.type``. A selector matching nothing gives
        the type's zero value, and so does an integer field whose text is not
        a number.
    """
    raw = _first_raw_value(scope, spec)
    if raw is None:
        return spec.zero_value
    if spec.type is int:
        return coerce_int(raw, spec.name)
    return raw


def _root_scope(
    scope: PageElement, mapping: MappingDescription
) -> PageElement:
    if mapping.root is None:
        return scope
    matches = scope.query(
        mapping.root, f"root of mapping '{mapping.name}'", min_count=0
    )
    if not matches:
        raise RootNotFoundException(
            selector=mapping.root,
            selector_type=selector_type(mapping.root),
            mapping_name=mapping.name,
            request_url=scope.request_url,
        )
    return matches[0]


def build_record(scope: PageElement, mapping: MappingDescription) -> Record:
    """Build the record a mapping description declares, within a scope.

    Scalar fields are extracted in declaration order, then every repeated
    child is built recursively in document order. The record itself is only
    constructed once all values are known.

    Args:
        scope: Element the mapping's root selector is evaluated against.
        mapping: The mapping description.

    Returns:
        The fully populated record.

    Raises:
        RootNotFoundException: If the root selector matches nothing.
        HTMLStructuralAssumptionException: If a children binding finds fewer
            scopes than its ``min_count``. The error is bound to the mapping
            and binding that raised it.
        DataFormatAssumptionException: If the values don't fit the model.
    """
    root = _root_scope(scope, mapping)
    pending = mapping.model.raw(root.request_url, mapping.name)

    for spec in mapping.fields:
        try:
            pending.set(spec.name, extract_field(root, spec))
        except HTMLStructuralAssumptionException as e:
            raise e.bind(mapping.name, spec.name)

    for children in mapping.children:
        try:
            child_scopes = root.query(
                children.selector, children.name, min_count=children.min_count
            )
            pending.set(
                children.name,
                tuple(
                    build_record(child, children.mapping)
                    for child in child_scopes
                ),
            )
        except HTMLStructuralAssumptionException as e:
            raise e.bind(mapping.name, children.name)

    record = pending.confirm()
    logger.debug(
        "Built %s from mapping '%s': %d field(s), %s",
        type(record).__name__,
        mapping.name,
        len(mapping.fields),
        ", ".join(
            f"{len(getattr(record, name))} {name}"
            for name in mapping.children_names
        )
        or "no children",
    )
    return record


def extract(
    document: str | bytes, mapping: MappingDescription, request_url: str = ""
) -> Record:
    """Parse an HTML document and build the record for a mapping.

    Args:
        document: HTML markup, already fetched by the caller.
        mapping: The mapping description to apply.
        request_url: URL the document came from, used in error messages.

    Returns:
        The top-level record.

    Raises:
        RootNotFoundException: If the root selector matches nothing.
    """
    page = LxmlPageElement.from_html(document, request_url)
    return build_record(page, mapping)

