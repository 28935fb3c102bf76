"""
Token: the smallest positional unit of analyzed text.
"""
from dataclasses import dataclass
from typing import ClassVar, List, Optional, Tuple

from adm.config.constants import KIND_TOKEN
from adm.models.base import (
    Attribute,
    AttributeBuilder,
    ToStringHelper,
    freeze_sequence,
    list_or_none,
    validate_required,
)


@dataclass(frozen=True, kw_only=True, repr=False)
class Token(Attribute):
    """
    A token covering [start_offset, end_offset) of the document text.

    normalized holds alternative normalized forms; None means normalization
    was never run, an empty tuple means it ran and produced nothing.
    source is the text as it appeared before any character transformation.
    """

    KIND: ClassVar[str] = KIND_TOKEN

    text: str
    normalized: Optional[Tuple[str, ...]] = None
    source: Optional[str] = None

    def __post_init__(self) -> None:
        super().__post_init__()
        validate_required(type(self).__name__, "text", self.text, str)
        object.__setattr__(
            self, "normalized", freeze_sequence(self.normalized, type(self).__name__, "normalized")
        )

    def _to_string_helper(self) -> ToStringHelper:
        return (
            super()
            ._to_string_helper()
            .add("text", self.text)
            .add("normalized", self.normalized)
            .add("source", self.source)
        )


class TokenBuilder(AttributeBuilder[Token]):
    """Builder for tokens; offsets and text are required."""

    attribute_class = Token

    def __init__(self, start_offset: int, end_offset: int, text: str) -> None:
        super().__init__(start_offset, end_offset)
        self._text = text
        self._normalized: Optional[List[str]] = None
        self._source: Optional[str] = None

    @classmethod
    def from_attribute(cls, source: Token) -> "TokenBuilder":
        builder = cls(source.start_offset, source.end_offset, source.text)
        builder._copy_from(source)
        return builder

    def _copy_from(self, source: Token) -> None:
        super()._copy_from(source)
        self._text = source.text
        self._normalized = list_or_none(
            source.normalized, self.attribute_class.__name__, "normalized"
        )
        self._source = source.source

    def _field_values(self) -> dict:
        values = super()._field_values()
        values.update(text=self._text, normalized=self._normalized, source=self._source)
        return values

    def text(self, text: str) -> "TokenBuilder":
        self._text = text
        return self

    def add_normalized(self, normalized: str) -> "TokenBuilder":
        """Append one normalized form."""
        if self._normalized is None:
            self._normalized = []
        self._normalized.append(normalized)
        return self

    def normalized(self, normalized: Optional[List[str]]) -> "TokenBuilder":
        """Replace all normalized forms; None marks them as not computed."""
        self._normalized = list_or_none(
            normalized, self.attribute_class.__name__, "normalized"
        )
        return self

    def source(self, source: Optional[str]) -> "TokenBuilder":
        self._source = source
        return self
