"""
Mention: a span of text that refers to an entity.
"""
from dataclasses import dataclass
from typing import ClassVar, Optional

from adm.config.constants import KIND_MENTION
from adm.models.base import Attribute, AttributeBuilder, ToStringHelper


@dataclass(frozen=True, kw_only=True, repr=False)
class Mention(Attribute):
    """
    One occurrence of an entity in the text.

    source names the producer that found the mention ("statistical",
    "gazetteer", "regex", ...); subsource narrows it further.
    """

    KIND: ClassVar[str] = KIND_MENTION

    entity_type: Optional[str] = None
    normalized: Optional[str] = None
    source: Optional[str] = None
    subsource: Optional[str] = None
    confidence: Optional[float] = None

    def _to_string_helper(self) -> ToStringHelper:
        return (
            super()
            ._to_string_helper()
            .add("entity_type", self.entity_type)
            .add("normalized", self.normalized)
            .add("source", self.source)
            .add("subsource", self.subsource)
            .add("confidence", self.confidence)
        )


class MentionBuilder(AttributeBuilder[Mention]):
    attribute_class = Mention

    def __init__(self, start_offset: int, end_offset: int, entity_type: Optional[str] = None) -> None:
        super().__init__(start_offset, end_offset)
        self._entity_type = entity_type
        self._normalized: Optional[str] = None
        self._source: Optional[str] = None
        self._subsource: Optional[str] = None
        self._confidence: Optional[float] = None

    @classmethod
    def from_attribute(cls, source: Mention) -> "MentionBuilder":
        builder = cls(source.start_offset, source.end_offset, source.entity_type)
        builder._copy_from(source)
        return builder

    def _copy_from(self, source: Mention) -> None:
        super()._copy_from(source)
        self._entity_type = source.entity_type
        self._normalized = source.normalized
        self._source = source.source
        self._subsource = source.subsource
        self._confidence = source.confidence

    def _field_values(self) -> dict:
        values = super()._field_values()
        values.update(
            entity_type=self._entity_type,
            normalized=self._normalized,
            source=self._source,
            subsource=self._subsource,
            confidence=self._confidence,
        )
        return values

    def entity_type(self, entity_type: Optional[str]) -> "MentionBuilder":
        self._entity_type = entity_type
        return self

    def normalized(self, normalized: Optional[str]) -> "MentionBuilder":
        self._normalized = normalized
        return self

    def source(self, source: Optional[str]) -> "MentionBuilder":
        self._source = source
        return self

    def subsource(self, subsource: Optional[str]) -> "MentionBuilder":
        self._subsource = subsource
        return self

    def confidence(self, confidence: Optional[float]) -> "MentionBuilder":
        self._confidence = confidence
        return self
