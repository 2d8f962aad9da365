"""Pending records: extracted values waiting to become a record.

The builder resolves a mapping one binding at a time. Each value is set on a
PendingRecord, and the record model is only validated once every binding
has been resolved, so a half-populated record never exists.
"""

import logging
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ValidationError

from gleaner.common.exceptions import DataFormatAssumptionException

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)


class PendingRecord(Generic[T]):
    """Values extracted for one record, validated together on confirm().

    Example:
        pending = TopicItem.raw(mapping_name="v2ex-topic-item")
        pending.set("title", "Hello")
        pending.set("comment_count", 3)
        item = pending.confirm()
    """

    def __init__(
        self,
        model_class: type[T],
        request_url: str = "",
        mapping_name: str | None = None,
        **values: Any,
    ) -> None:
        self._model_class = model_class
        self._request_url = request_url
        self._mapping_name = mapping_name
        self._values = values

    def set(self, name: str, value: Any) -> None:
        self._values[name] = value

    def confirm(self) -> T:
        """Validate the collected values into the record model.

        Raises:
            DataFormatAssumptionException: If the mapping produced values the
                model rejects. The exception names the mapping, the model and
                every rejected field.
        """
        try:
            return self._model_class.model_validate(self._values)
        except ValidationError as e:
            logger.debug(
                "%s rejected %d value(s) from mapping %s",
                self.model_name,
                e.error_count(),
                self._mapping_name or "(unnamed)",
            )
            raise DataFormatAssumptionException(
                errors=[dict(err) for err in e.errors(include_url=False)],
                failed_doc=dict(self._values),
                model_name=self.model_name,
                request_url=self._request_url,
                mapping_name=self._mapping_name,
            ) from e

    @property
    def values(self) -> dict[str, Any]:
        """Copy of the values set so far."""
        return dict(self._values)

    @property
    def model_name(self) -> str:
        return self._model_class.__name__

    @property
    def mapping_name(self) -> str | None:
        return self._mapping_name

    def __repr__(self) -> str:
        source = f" from {self._mapping_name!r}" if self._mapping_name else ""
        return (
            f"<PendingRecord {self.model_name}{source}: "
            f"{', '.join(self._values) or 'no values'}>"
        )
