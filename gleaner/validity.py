"""Validity gate for built records.

A page whose listing is empty is a legitimate result (the last page of a
paginated listing, a user with no topics). A listing whose first entry has
no title is not: it means the child selector still matches something but
the markup inside has changed. is_valid() tells the two apart.
"""

import logging

from gleaner.common.exceptions import MappingDefinitionError
from gleaner.record import Record, ValidityRule

logger = logging.getLogger(__name__)


def is_valid(record: Record, rule: ValidityRule | None = None) -> bool:
    """Decide whether a built record is a structurally valid result.

    Args:
        record: The top-level record returned by the builder.
        rule: Rule to apply. Defaults to the record class's ``validity_rule``,
            which is checked against the model when the class is defined; a
            record without a rule is always valid.

    Returns:
        True if the child list is empty or its first entry's primary field
        is non-empty.

    Raises:
        MappingDefinitionError: If an explicit rule names a field the record
            does not have.
    """
    rule = rule or type(record).validity_rule
    if rule is None:
        return True

    if rule.children not in type(record).model_fields:
        raise MappingDefinitionError(
            f"{type(record).__name__} has no children field '{rule.children}'"
        )
    children = getattr(record, rule.children)
    if not children:
        return True

    first = children[0]
    if rule.primary_field not in type(first).model_fields:
        raise MappingDefinitionError(
            f"{type(first).__name__} has no field '{rule.primary_field}'"
        )
    if getattr(first, rule.primary_field):
        return True

    logger.warning(
        "%s has %d %s but the first has an empty %s",
        type(record).__name__,
        len(children),
        rule.children,
        rule.primary_field,
    )
    return False
