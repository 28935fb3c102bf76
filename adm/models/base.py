"""
Base attribute abstractions shared by every annotation in the data model.

- BaseAttribute: the extension bag plus the equality / hash / repr contract.
- Attribute:     a BaseAttribute that covers a half-open span [start, end).
- ToStringHelper: chained name=value accumulator behind every repr().
- BaseAttributeBuilder / AttributeBuilder: mutable staging objects that
  produce one frozen attribute per build() call.

Equality and hashing are derived field-wise by dataclasses, so fields are
compared in declaration order (superclass fields first) and instances of
different concrete classes never compare equal. The extension bag takes
part in equality but not in the hash, since its values may be unhashable.
"""
from __future__ import annotations

import collections.abc
import copy
import logging
from dataclasses import dataclass, field, fields
from enum import Enum
from types import MappingProxyType
from typing import Any, ClassVar, Dict, Generic, Iterable, List, Mapping, Optional, Tuple, TypeVar

from adm.config import settings
from adm.config.constants import KIND_KEY
from adm.models.errors import AttributeValidationError, InvalidSpanError

logger = logging.getLogger(__name__)


# =============================================================================
# Freezing helpers
# =============================================================================

def freeze_sequence(
    values: Optional[Iterable[Any]],
    attribute_type: str,
    name: str,
) -> Optional[Tuple[Any, ...]]:
    """Copy a sequence into a tuple; None stays None (not computed != empty)."""
    if values is None:
        return None
    _reject_string(values, attribute_type, name)
    return tuple(values)


def _reject_string(values: Any, attribute_type: str, name: str) -> None:
    if isinstance(values, (str, bytes)):
        logger.warning("String given for sequence %s=%r on %s", name, values, attribute_type)
        raise AttributeValidationError(
            attribute_type, f"{name} must be a sequence of items, not a string: {values!r}"
        )


def _freeze_value(value: Any) -> Any:
    if isinstance(value, (list, tuple)):
        return tuple(_freeze_value(v) for v in value)
    if isinstance(value, collections.abc.Mapping):
        return {k: _freeze_value(v) for k, v in value.items()}
    return copy.deepcopy(value)


def freeze_properties(
    properties: Optional[Mapping[str, Any]],
    attribute_type: str,
) -> Mapping[str, Any]:
    """
    Copy an extension bag into a read-only mapping.

    Keys must be strings. Entries whose value is None are dropped: an absent
    key is the only way to say "not present". Values are deep-copied, and
    lists become tuples, so the caller keeps no handle on the stored data.
    """
    if not properties:
        return MappingProxyType({})

    frozen: Dict[str, Any] = {}
    for key, value in dict(properties).items():
        if not isinstance(key, str):
            logger.warning("Rejected extended property key %r on %s", key, attribute_type)
            raise AttributeValidationError(
                attribute_type, f"extended property keys must be strings, got {key!r}"
            )
        if value is not None:
            frozen[key] = _freeze_value(value)
    return MappingProxyType(frozen)


# =============================================================================
# String representation
# =============================================================================

def _format_value(value: Any) -> str:
    if isinstance(value, tuple):
        items = [_format_value(v) for v in value]
        limit = settings.ADM_REPR_MAX_ITEMS
        if 0 < limit < len(items):
            items = items[:limit] + [f"... +{len(value) - limit} more"]
        return "[" + ", ".join(items) + "]"
    if isinstance(value, collections.abc.Mapping):
        return repr(dict(value))
    if isinstance(value, Enum):
        return value.name
    return repr(value)


class ToStringHelper:
    """
    Chained builder for a stable ``Name(field=value, ...)`` representation.

    Each attribute class extends the helper returned by its superclass, so
    inherited fields always come first.
    """

    def __init__(self, name: str) -> None:
        self._name = name
        self._parts: List[str] = []

    def add(self, label: str, value: Any) -> "ToStringHelper":
        self._parts.append(f"{label}={_format_value(value)}")
        return self

    def __str__(self) -> str:
        return f"{self._name}({', '.join(self._parts)})"


# =============================================================================
# Dict rendering
# =============================================================================

def to_plain(value: Any) -> Any:
    """Render a field value as JSON-compatible data."""
    if isinstance(value, BaseAttribute):
        return value.to_dict()
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, tuple):
        return [to_plain(v) for v in value]
    if isinstance(value, collections.abc.Mapping):
        return {k: to_plain(v) for k, v in value.items()}
    return value


# =============================================================================
# Attributes
# =============================================================================

@dataclass(frozen=True, kw_only=True, repr=False)
class BaseAttribute:
    """
    Root of every annotation: an immutable value plus an extension bag.

    The extension bag holds forward-compatible data (provenance, tool
    specific scores, ...) that the schema does not model explicitly.
    """

    KIND: ClassVar[str] = ""

    extended_properties: Mapping[str, Any] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        if not self.KIND:
            raise TypeError(f"{type(self).__name__} is abstract and cannot be instantiated")
        object.__setattr__(
            self,
            "extended_properties",
            freeze_properties(self.extended_properties, type(self).__name__),
        )

    def _to_string_helper(self) -> ToStringHelper:
        helper = ToStringHelper(type(self).__name__)
        if self.extended_properties:
            helper.add("extended_properties", self.extended_properties)
        return helper

    def __repr__(self) -> str:
        return str(self._to_string_helper())

    def __getstate__(self) -> Dict[str, Any]:
        state = dict(self.__dict__)
        state["extended_properties"] = dict(self.extended_properties)
        return state

    def __setstate__(self, state: Dict[str, Any]) -> None:
        for name, value in state.items():
            object.__setattr__(self, name, value)
        object.__setattr__(
            self, "extended_properties", MappingProxyType(dict(state["extended_properties"]))
        )

    def to_dict(self) -> dict:
        data = {KIND_KEY: self.KIND}
        for f in fields(self):
            data[f.name] = to_plain(getattr(self, f.name))
        return data


@dataclass(frozen=True, kw_only=True, repr=False)
class Attribute(BaseAttribute):
    """An attribute that covers the characters [start_offset, end_offset)."""

    start_offset: int
    end_offset: int

    def __post_init__(self) -> None:
        super().__post_init__()
        validate_span(type(self).__name__, self.start_offset, self.end_offset)

    @property
    def length(self) -> int:
        return self.end_offset - self.start_offset

    def covers(self, other: "Attribute") -> bool:
        """True if *other* lies entirely inside this span."""
        return self.start_offset <= other.start_offset and other.end_offset <= self.end_offset

    def overlaps(self, other: "Attribute") -> bool:
        """Check if two attributes have overlapping spans."""
        return not (self.end_offset <= other.start_offset or other.end_offset <= self.start_offset)

    def _to_string_helper(self) -> ToStringHelper:
        return (
            super()
            ._to_string_helper()
            .add("start_offset", self.start_offset)
            .add("end_offset", self.end_offset)
        )


def validate_span(attribute_type: str, start_offset: Any, end_offset: Any) -> None:
    """Raise InvalidSpanError unless 0 <= start_offset <= end_offset."""
    for offset in (start_offset, end_offset):
        if not isinstance(offset, int) or isinstance(offset, bool):
            logger.warning("Non-integer offset %r on %s", offset, attribute_type)
            raise InvalidSpanError(attribute_type, start_offset, end_offset)
    if start_offset < 0 or start_offset > end_offset:
        logger.warning(
            "Invalid span [%d, %d) on %s", start_offset, end_offset, attribute_type
        )
        raise InvalidSpanError(attribute_type, start_offset, end_offset)


# =============================================================================
# Builders
# =============================================================================

AttributeT = TypeVar("AttributeT", bound=BaseAttribute)
BuilderT = TypeVar("BuilderT", bound="BaseAttributeBuilder")


class BaseAttributeBuilder(Generic[AttributeT]):
    """
    Mutable staging object for one attribute class.

    Setters return the builder so calls can be chained. build() may be called
    any number of times; every call snapshots the current state into a new
    frozen attribute, so later builder changes never leak into it.

    Concrete builders add a from_attribute() classmethod: a copy constructor
    seeded with every field of an existing attribute.

    Builders are not thread-safe.
    """

    attribute_class: ClassVar[type] = BaseAttribute

    def __init__(self) -> None:
        self._extended_properties: Dict[str, Any] = {}

    def _copy_from(self, source: AttributeT) -> None:
        self._extended_properties = dict(source.extended_properties)

    def _field_values(self) -> Dict[str, Any]:
        return {"extended_properties": dict(self._extended_properties)}

    def extended_property(self: BuilderT, key: str, value: Any) -> BuilderT:
        """Set one extension entry; a None value removes the key."""
        if value is None:
            self._extended_properties.pop(key, None)
        else:
            self._extended_properties[key] = value
        return self

    def extended_properties(self: BuilderT, properties: Mapping[str, Any]) -> BuilderT:
        """Merge *properties* into the extension bag."""
        for key, value in properties.items():
            self.extended_property(key, value)
        return self

    def build(self) -> AttributeT:
        """Return a new immutable attribute from the current builder state."""
        attribute = self.attribute_class(**self._field_values())
        if settings.ADM_LOG_BUILDS:
            logger.debug("Built %r", attribute)
        return attribute


class AttributeBuilder(BaseAttributeBuilder[AttributeT]):
    """Builder for span-bearing attributes; offsets are required."""

    def __init__(self, start_offset: int, end_offset: int) -> None:
        super().__init__()
        self._start_offset = start_offset
        self._end_offset = end_offset

    def _copy_from(self, source: AttributeT) -> None:
        super()._copy_from(source)
        self._start_offset = source.start_offset
        self._end_offset = source.end_offset

    def _field_values(self) -> Dict[str, Any]:
        values = super()._field_values()
        values["start_offset"] = self._start_offset
        values["end_offset"] = self._end_offset
        return values

    def start_offset(self: BuilderT, start_offset: int) -> BuilderT:
        self._start_offset = start_offset
        return self

    def end_offset(self: BuilderT, end_offset: int) -> BuilderT:
        self._end_offset = end_offset
        return self


def list_or_none(
    values: Optional[Iterable[Any]],
    attribute_type: str,
    name: str,
) -> Optional[List[Any]]:
    """Fresh builder-owned list; None stays None."""
    if values is None:
        return None
    _reject_string(values, attribute_type, name)
    return list(values)


def validate_required(attribute_type: str, name: str, value: Any, expected: type) -> None:
    """Raise AttributeValidationError unless *value* is an instance of *expected*."""
    if not isinstance(value, expected):
        logger.warning("Missing or mistyped %s=%r on %s", name, value, attribute_type)
        raise AttributeValidationError(
            attribute_type, f"{name} must be {expected.__name__}, got {value!r}"
        )
