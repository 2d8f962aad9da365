"""Record base model and lazily derived fields.

Records are frozen Pydantic models holding the raw values a mapping
description extracted. Derived attributes are declared with ``@derived``:
each is computed from raw fields on first access, stored in the record's
DerivedCache, and returned from the cache afterwards.

Example::

    class TopicItem(Record):
        link: str = ""

        @derived
        def topic_id(self) -> str:
            return extract_topic_id(self.link)
"""

import threading
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from functools import partial, wraps
from typing import Any, ClassVar, TypeVar, get_args

from pydantic import BaseModel, ConfigDict, PrivateAttr

from gleaner.common.exceptions import MappingDefinitionError
from gleaner.common.pending_record import PendingRecord

R = TypeVar("R", bound="Record")
T = TypeVar("T")


@dataclass(frozen=True)
class ValidityRule:
    """Heuristic for telling an empty page from a mismatched one.

    Attributes:
        children: Name of the repeated child field to inspect.
        primary_field: Field of the first child that must be non-empty.
    """

    children: str
    primary_field: str


class DerivedCache:
    """Write-once slots for the derived values of one record.

    Each slot is computed under a re-entrant lock, so concurrent readers of a
    record compute every derived value exactly once. A derivation that reads
    its own slot while being computed raises RuntimeError.
    """

    def __init__(self) -> None:
        self._values: dict[str, Any] = {}
        self._pending: set[str] = set()
        self._lock = threading.RLock()

    def get_or_compute(self, name: str, compute: Callable[[], T]) -> T:
        """Return the cached value for ``name``, computing it on first use.

        Args:
            name: Slot name (the derived attribute's name).
            compute: Zero-argument callable producing the value.

        Returns:
            The cached value.

        Raises:
            RuntimeError: If ``compute`` re-enters the slot it is filling.
        """
        if name in self._values:
            return self._values[name]

        with self._lock:
            if name in self._values:
                return self._values[name]
            if name in self._pending:
                raise RuntimeError(
                    f"Derived field '{name}' depends on itself"
                )
            self._pending.add(name)
            try:
                value = compute()
            finally:
                self._pending.discard(name)
            self._values[name] = value
            return value

    def computed(self) -> tuple[str, ...]:
        """Names of the slots that already hold a value."""
        return tuple(self._values)

    def __eq__(self, other: object) -> bool:
        # Derived values are a function of the raw fields, so they never
        # distinguish two records.
        return isinstance(other, DerivedCache)

    __hash__ = None  # type: ignore[assignment]

    def __reduce__(self):
        # Copies and unpickled records start with an empty cache.
        return (DerivedCache, ())

    def __repr__(self) -> str:
        return f"DerivedCache(computed={list(self._values)})"


def derived(func: Callable[[R], T]) -> property:
    """Declare a lazily computed, memoized attribute on a Record subclass.

    The decorated method runs at most once per record instance; later reads
    return the cached value.

    Args:
        func: Method computing the value from the record's raw fields.

    Returns:
        A read-only property backed by the record's DerivedCache.
    """
    name = func.__name__

    @wraps(func)
    def getter(self: R) -> T:
        return self._derived.get_or_compute(name, partial(func, self))

    getter._derived_field = True  # type: ignore[attr-defined]
    return property(getter, doc=func.__doc__)


class Record(BaseModel):
    """Base class for records built from mapping descriptions.

    Raw fields are declared as ordinary Pydantic fields (``str`` or ``int``
    scalars, ``tuple[ChildRecord, ...]`` for repeated children) and are
    immutable once the record is built.

    Attributes:
        validity_rule: Optional rule used by the validity gate.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    validity_rule: ClassVar[ValidityRule | None] = None

    _derived: DerivedCache = PrivateAttr(default_factory=DerivedCache)

    @classmethod
    def __pydantic_init_subclass__(cls, **kwargs: Any) -> None:
        """Check the class's validity rule against its declared fields."""
        super().__pydantic_init_subclass__(**kwargs)
        rule = cls.validity_rule
        if rule is None:
            return
        children = cls.model_fields.get(rule.children)
        if children is None:
            raise MappingDefinitionError(
                f"{cls.__name__}.validity_rule inspects '{rule.children}', "
                "which is not a field"
            )
        child_model = next(
            (
                arg
                for arg in get_args(children.annotation)
                if isinstance(arg, type) and issubclass(arg, Record)
            ),
            None,
        )
        if child_model is None and not cls.__pydantic_complete__:
            # Forward reference to a child model defined later
            return
        if child_model is None:
            raise MappingDefinitionError(
                f"{cls.__name__}.{rule.children} is not a tuple of records"
            )
        if rule.primary_field not in child_model.model_fields:
            raise MappingDefinitionError(
                f"{cls.__name__}.validity_rule checks "
                f"'{rule.primary_field}', which {child_model.__name__} "
                "does not declare"
            )

    @classmethod
    def raw(
        cls: type[R],
        request_url: str = "",
        mapping_name: str | None = None,
        **values: Any,
    ) -> PendingRecord[R]:
        """Start a record whose values are validated on confirm()."""
        return PendingRecord(cls, request_url, mapping_name, **values)

    @classmethod
    def derived_fields(cls) -> tuple[str, ...]:
        """Names of the ``@derived`` attributes, base classes first."""
        names: list[str] = []
        for klass in reversed(cls.__mro__):
            for name, attr in vars(klass).items():
                if (
                    isinstance(attr, property)
                    and getattr(attr.fget, "_derived_field", False)
                    and name not in names
                ):
                    names.append(name)
        return tuple(names)

    @property
    def derived_cache(self) -> DerivedCache:
        return self._derived

    def model_copy(
        self: R,
        *,
        update: Mapping[str, Any] | None = None,
        deep: bool = False,
    ) -> R:
        copied = super().model_copy(update=update, deep=deep)
        # An updated copy may have different raw fields
        copied._derived = DerivedCache()
        return copied

    def to_dict(self, include_derived: bool = True) -> dict[str, Any]:
        """Convert the record to plain data.

        Args:
            include_derived: Also compute and include derived attributes.

        Returns:
            Dictionary of field values; child records become lists of dicts.
        """
        data = {
            name: _plain(getattr(self, name), include_derived)
            for name in type(self).model_fields
        }
        if include_derived:
            for name in self.derived_fields():
                data[name] = getattr(self, name)
        return data

    def is_valid(self) -> bool:
        """Shortcut for :func:`gleaner.validity.is_valid`."""
        from gleaner.validity import is_valid

        return is_valid(self)


def _plain(value: Any, include_derived: bool) -> Any:
    if isinstance(value, Record):
        return value.to_dict(include_derived)
    if isinstance(value, (tuple, list)):
        return [_plain(item, include_derived) for item in value]
    return value
