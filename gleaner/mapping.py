"""Mapping descriptions: declarative bindings from selectors to record fields.

A MappingDescription is built once, at import time, and shared read-only by
every extraction call. It names a root scope selector, the scalar fields to
extract from that scope in declaration order, and the repeated child
records to build from sub-scopes.

Example::

    TOPIC_ITEM = MappingDescription(
        name="topic-item",
        model=TopicItem,
        fields=(
            FieldSpec("title", "span.item_title"),
            FieldSpec("link", "span.item_title a", attr="href"),
            FieldSpec("comment_count", "a[class^=count_]", type=int),
        ),
    )
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from cssselect import HTMLTranslator, SelectorError
from lxml import etree

from gleaner.common.exceptions import MappingDefinitionError
from gleaner.common.selector_utils import is_xpath, selector_type

if TYPE_CHECKING:
    from gleaner.record import Record

FIELD_TYPES = (str, int)

_css_translator = HTMLTranslator()


def check_selector(owner: str, selector: str) -> None:
    """Compile a selector once so a typo fails at definition time.

    Args:
        owner: What the selector belongs to, for the error message.
        selector: CSS selector or XPath expression.

    Raises:
        MappingDefinitionError: If the selector does not compile.
    """
    try:
        if is_xpath(selector):
            etree.XPath(selector)
        else:
            _css_translator.css_to_xpath(selector)
    except (SelectorError, etree.XPathError) as e:
        raise MappingDefinitionError(
            f"{owner} has an invalid {selector_type(selector)} selector "
            f"{selector!r}: {e}"
        ) from e


class AttrMode(Enum):
    """What to read from the element a field selector matched."""

    TEXT = "text"
    ATTRIBUTE = "attribute"
    OWN_TEXT = "own_text"


@dataclass(frozen=True)
class FieldSpec:
    """A scalar field bound to a selector.

    Attributes:
        name: Field of the record model that receives the value.
        selector: CSS selector or XPath expression, relative to the scope.
            An empty selector addresses the scope element itself.
        attr: Attribute to read. Setting it implies ATTRIBUTE mode.
        mode: TEXT, ATTRIBUTE or OWN_TEXT.
        type: ``str`` or ``int``.
    """

    name: str
    selector: str
    attr: str | None = None
    mode: AttrMode = AttrMode.TEXT
    type: type = str

    def __post_init__(self) -> None:
        if self.attr is not None and self.mode is AttrMode.TEXT:
            object.__setattr__(self, "mode", AttrMode.ATTRIBUTE)
        if self.mode is AttrMode.ATTRIBUTE and not self.attr:
            raise MappingDefinitionError(
                f"Field '{self.name}' reads an attribute but names none"
            )
        if self.mode is not AttrMode.ATTRIBUTE and self.attr is not None:
            raise MappingDefinitionError(
                f"Field '{self.name}' names attribute '{self.attr}' "
                f"but uses {self.mode.name} mode"
            )
        if self.type not in FIELD_TYPES:
            raise MappingDefinitionError(
                f"Field '{self.name}' has unsupported type "
                f"{getattr(self.type, '__name__', self.type)!r}; "
                "expected str or int"
            )
        if self.selector:
            check_selector(f"Field '{self.name}'", self.selector)

    @property
    def selector_type(self) -> str:
        return selector_type(self.selector)

    @property
    def zero_value(self) -> str | int:
        """Value used when the selector matches nothing."""
        return self.type()


@dataclass(frozen=True)
class ChildrenSpec:
    """A repeated child record built from every scope a selector matches.

    Attributes:
        name: Field of the record model that receives the tuple of children.
        selector: Selector enumerating child scopes, in document order.
        mapping: Mapping description applied to each child scope.
        min_count: Number of child scopes that must exist. The default of 0
            makes an empty list a legitimate result.
    """

    name: str
    selector: str
    mapping: MappingDescription
    min_count: int = 0

    def __post_init__(self) -> None:
        if not self.selector:
            raise MappingDefinitionError(
                f"Children '{self.name}' need a selector"
            )
        if self.min_count < 0:
            raise MappingDefinitionError(
                f"Children '{self.name}' have a negative min_count"
            )
        check_selector(f"Children '{self.name}'", self.selector)


@dataclass(frozen=True)
class MappingDescription:
    """Declarative schema binding selectors to the fields of a record model.

    Attributes:
        name: Identifier used in error messages and the registry.
        model: Record subclass the values are validated into.
        fields: Scalar field bindings, extracted in this order.
        children: Repeated child bindings.
        root: Root scope selector. None uses the scope passed to the builder.
    """

    name: str
    model: type[Record]
    fields: tuple[FieldSpec, ...] = ()
    children: tuple[ChildrenSpec, ...] = field(default=())
    root: str | None = None

    def __post_init__(self) -> None:
        # Accept lists in declarations but store tuples
        object.__setattr__(self, "fields", tuple(self.fields))
        object.__setattr__(self, "children", tuple(self.children))

        names = [spec.name for spec in self.fields] + [
            spec.name for spec in self.children
        ]
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            raise MappingDefinitionError(
                f"Mapping '{self.name}' binds {', '.join(duplicates)} "
                "more than once"
            )

        model_fields = self.model.model_fields
        unknown = [name for name in names if name not in model_fields]
        if unknown:
            raise MappingDefinitionError(
                f"Mapping '{self.name}' binds {', '.join(unknown)}, "
                f"which {self.model.__name__} does not declare"
            )

        if self.root == "":
            raise MappingDefinitionError(
                f"Mapping '{self.name}' has an empty root selector; "
                "use None to keep the scope"
            )
        if self.root is not None:
            check_selector(f"Root of mapping '{self.name}'", self.root)

    @property
    def field_names(self) -> tuple[str, ...]:
        return tuple(spec.name for spec in self.fields)

    @property
    def children_names(self) -> tuple[str, ...]:
        return tuple(spec.name for spec in self.children)


_registry: dict[str, MappingDescription] = {}


def register_mapping(mapping: MappingDescription) -> MappingDescription:
    """Register a mapping description under its name.

    Registering the same description twice is a no-op.

    Raises:
        MappingDefinitionError: If another description already uses the name.
    """
    existing = _registry.get(mapping.name)
    if existing is not None and existing is not mapping:
        raise MappingDefinitionError(
            f"A different mapping is already registered as '{mapping.name}'"
        )
    _registry[mapping.name] = mapping
    return mapping


def get_mapping(name: str) -> MappingDescription:
    """Look up a registered mapping description.

    Raises:
        KeyError: If no description is registered under ``name``.
    """
    try:
        return _registry[name]
    except KeyError:
        raise KeyError(
            f"No mapping registered as '{name}'. "
            f"Known mappings: {', '.join(sorted(_registry)) or 'none'}"
        ) from None


def registered_mappings() -> dict[str, MappingDescription]:
    """Return a snapshot of the registry, sorted by name."""
    return dict(sorted(_registry.items()))
