"""Exceptions raised when a document or a mapping breaks an assumption.

Degraded values (a missing scalar, a malformed integer) are not errors and
never reach this module. What does:

- the document no longer has the shape a mapping describes
  (HTMLStructuralAssumptionException, RootNotFoundException);
- the values a mapping produced don't fit its record model
  (DataFormatAssumptionException);
- a mapping description is itself invalid (MappingDefinitionError), raised
  at import time rather than during extraction.
"""

from typing import Any


class ExtractionAssumptionException(Exception):
    """Base class for violated page assumptions.

    The rendered message is the summary line, the document URL, then one
    indented line per context entry. Context can grow after the exception
    is created (see HTMLStructuralAssumptionException.bind), so the text is
    rendered on demand.

    Attributes:
        message: One-line summary.
        request_url: URL of the document, or "" when unknown.
        context: Extra details such as the selector and the counts.
    """

    def __init__(
        self,
        message: str,
        request_url: str = "",
        context: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.request_url = request_url
        self.context = dict(context or {})

    def __str__(self) -> str:
        lines = [self.message, f"URL: {self.request_url or '(unknown)'}"]
        if self.context:
            lines.append("Context:")
            lines.extend(f"  {key}: {value}" for key, value in self.context.items())
        return "\n".join(lines)


def _expected_phrase(minimum: int, maximum: int | None) -> str:
    if maximum is None:
        return f"at least {minimum}"
    if minimum == maximum:
        return f"exactly {minimum}"
    return f"between {minimum} and {maximum}"


class HTMLStructuralAssumptionException(ExtractionAssumptionException):
    """A selector matched a number of nodes outside the expected range.

    Also raised for selectors the evaluator cannot parse, with an actual
    count of 0. The builder binds the mapping and field being extracted
    before the exception leaves it, so the message names the binding that
    no longer matches the page.

    Attributes:
        selector: The CSS selector or XPath expression.
        selector_type: "css" or "xpath".
        description: What the selector was meant to find.
        expected_min: Fewest matches accepted.
        expected_max: Most matches accepted, None for no limit.
        actual_count: Matches found.
        is_element_query: False when the query selected strings.
        mapping_name: Mapping being applied, once known.
        field_name: Field or children binding being extracted, once known.
    """

    def __init__(
        self,
        selector: str,
        selector_type: str,
        description: str,
        expected_min: int,
        expected_max: int | None,
        actual_count: int,
        request_url: str = "",
        is_element_query: bool = True,
        mapping_name: str | None = None,
        field_name: str | None = None,
    ) -> None:
        self.selector = selector
        self.selector_type = selector_type
        self.description = description
        self.expected_min = expected_min
        self.expected_max = expected_max
        self.actual_count = actual_count
        self.is_element_query = is_element_query
        self.mapping_name = None
        self.field_name = None

        kind = "element" if is_element_query else "string"
        super().__init__(
            f"{selector_type} selector for '{description}' matched "
            f"{actual_count} {kind}(s), expected "
            f"{_expected_phrase(expected_min, expected_max)}",
            request_url,
            {"selector": selector, "selector_type": selector_type},
        )
        self.bind(mapping_name, field_name)

    def bind(
        self, mapping_name: str | None, field_name: str | None = None
    ) -> "HTMLStructuralAssumptionException":
        """Record which mapping binding the failing selector belongs to.

        Names already bound are kept, so the innermost binding wins when
        the error passes through nested child mappings.

        Returns:
            The exception itself, for ``raise exc.bind(...)``.
        """
        if self.mapping_name is None and mapping_name is not None:
            self.mapping_name = mapping_name
            self.context["mapping"] = mapping_name
        elif self.mapping_name != mapping_name:
            return self
        if self.field_name is None and field_name is not None:
            self.field_name = field_name
            self.context["field"] = field_name
        return self


class RootNotFoundException(HTMLStructuralAssumptionException):
    """A mapping's root selector matched nothing.

    Fatal for the extraction call: without a root scope the record would be
    all defaults, which is indistinguishable from an empty page. The usual
    cause is being served a different page (a sign-in form, an error page).
    """

    def __init__(
        self,
        selector: str,
        selector_type: str,
        mapping_name: str,
        request_url: str = "",
    ) -> None:
        super().__init__(
            selector=selector,
            selector_type=selector_type,
            description=f"root of mapping '{mapping_name}'",
            expected_min=1,
            expected_max=None,
            actual_count=0,
            request_url=request_url,
            mapping_name=mapping_name,
        )


def _error_location(loc: tuple[Any, ...]) -> str:
    return ".".join(str(part) for part in loc) or "record"


class DataFormatAssumptionException(ExtractionAssumptionException):
    """The values a mapping produced don't fit its record model.

    The field extractor already coerces every value to its declared type,
    so this points at the mapping and the model disagreeing: a field bound
    with the wrong type, or a binding the model doesn't declare.

    Attributes:
        errors: Pydantic validation errors.
        failed_doc: The values that were rejected.
        model_name: Name of the record model.
        mapping_name: Mapping that produced the values, if known.
        invalid_fields: Dotted locations of the rejected values.
    """

    def __init__(
        self,
        errors: list[dict[str, Any]],
        failed_doc: dict[str, Any],
        model_name: str,
        request_url: str = "",
        mapping_name: str | None = None,
    ) -> None:
        self.errors = errors
        self.failed_doc = failed_doc
        self.model_name = model_name
        self.mapping_name = mapping_name
        self.invalid_fields = tuple(
            _error_location(tuple(err.get("loc", ()))) for err in errors
        )

        source = f"Mapping '{mapping_name}'" if mapping_name else "Extraction"
        summary = "; ".join(
            f"{location}: {err['msg']}"
            for location, err in zip(self.invalid_fields, errors)
        )
        context: dict[str, Any] = {"model": model_name}
        if mapping_name:
            context["mapping"] = mapping_name
        super().__init__(
            f"{source} produced values {model_name} rejects: {summary}",
            request_url,
            context,
        )


class MappingDefinitionError(ValueError):
    """Raised when a mapping description or record model is invalid."""
