"""
Entity: a "real world" referent resolved from one or more Mentions.

A Mention is a span of text that mentions an entity, while an Entity
describes the entity itself; entities are not spans of text. One mention
may be designated as head: the one judged the best representation of the
entity. head_mention_index is checked when the entity is constructed, so
an Entity always holds either no head or a valid index into its mentions.
"""
import logging
from dataclasses import dataclass
from typing import ClassVar, List, Optional, Tuple

from adm.config.constants import KIND_ENTITY
from adm.models.base import (
    BaseAttribute,
    BaseAttributeBuilder,
    ToStringHelper,
    freeze_sequence,
    list_or_none,
)
from adm.models.categorizer import CategorizerResult
from adm.models.errors import InvalidHeadMentionIndexError
from adm.models.mention import Mention

logger = logging.getLogger(__name__)


@dataclass(frozen=True, kw_only=True, repr=False)
class Entity(BaseAttribute):
    """A resolved entity with its supporting mentions."""

    KIND: ClassVar[str] = KIND_ENTITY

    mentions: Optional[Tuple[Mention, ...]] = None
    head_mention_index: Optional[int] = None
    type: Optional[str] = None
    entity_id: Optional[str] = None
    confidence: Optional[float] = None
    sentiment: Optional[Tuple[CategorizerResult, ...]] = None

    def __post_init__(self) -> None:
        super().__post_init__()
        object.__setattr__(
            self, "mentions", freeze_sequence(self.mentions, type(self).__name__, "mentions")
        )
        object.__setattr__(
            self, "sentiment", freeze_sequence(self.sentiment, type(self).__name__, "sentiment")
        )
        self._validate_head_mention_index()

    def _validate_head_mention_index(self) -> None:
        index = self.head_mention_index
        if index is None:
            return
        count = len(self.mentions) if self.mentions is not None else 0
        if not isinstance(index, int) or isinstance(index, bool) or not 0 <= index < count:
            logger.warning(
                "Rejected head mention index %r for entity %r with %d mention(s)",
                index, self.entity_id, count,
            )
            raise InvalidHeadMentionIndexError(type(self).__name__, index, count)

    @property
    def head_mention(self) -> Optional[Mention]:
        """The designated head mention, or None if no head is set."""
        if self.head_mention_index is None:
            return None
        return self.mentions[self.head_mention_index]

    def _to_string_helper(self) -> ToStringHelper:
        return (
            super()
            ._to_string_helper()
            .add("mentions", self.mentions)
            .add("head_mention_index", self.head_mention_index)
            .add("type", self.type)
            .add("entity_id", self.entity_id)
            .add("confidence", self.confidence)
            .add("sentiment", self.sentiment)
        )


class EntityBuilder(BaseAttributeBuilder[Entity]):
    """
    Builder for entities. Nothing is required; mentions and sentiment start
    as empty lists.

    head_mention_index is not checked when set, only at build(), so the
    index may be chosen before all mentions have been added.
    """

    attribute_class = Entity

    def __init__(self) -> None:
        super().__init__()
        self._mentions: Optional[List[Mention]] = []
        self._head_mention_index: Optional[int] = None
        self._type: Optional[str] = None
        self._entity_id: Optional[str] = None
        self._confidence: Optional[float] = None
        self._sentiment: Optional[List[CategorizerResult]] = []

    @classmethod
    def from_attribute(cls, source: Entity) -> "EntityBuilder":
        builder = cls()
        builder._copy_from(source)
        return builder

    def _copy_from(self, source: Entity) -> None:
        super()._copy_from(source)
        self._mentions = list_or_none(
            source.mentions, self.attribute_class.__name__, "mentions"
        )
        self._head_mention_index = source.head_mention_index
        self._type = source.type
        self._entity_id = source.entity_id
        self._confidence = source.confidence
        self._sentiment = list_or_none(
            source.sentiment, self.attribute_class.__name__, "sentiment"
        )

    def _field_values(self) -> dict:
        values = super()._field_values()
        values.update(
            mentions=self._mentions,
            head_mention_index=self._head_mention_index,
            type=self._type,
            entity_id=self._entity_id,
            confidence=self._confidence,
            sentiment=self._sentiment,
        )
        return values

    def mention(self, mention: Mention) -> "EntityBuilder":
        """Append one mention."""
        if self._mentions is None:
            self._mentions = []
        self._mentions.append(mention)
        return self

    def mentions(self, mentions: Optional[List[Mention]]) -> "EntityBuilder":
        """Replace all mentions; None marks them as not computed."""
        self._mentions = list_or_none(
            mentions, self.attribute_class.__name__, "mentions"
        )
        return self

    def head_mention_index(self, head_mention_index: Optional[int]) -> "EntityBuilder":
        self._head_mention_index = head_mention_index
        return self

    def type(self, entity_type: Optional[str]) -> "EntityBuilder":
        self._type = entity_type
        return self

    def entity_id(self, entity_id: Optional[str]) -> "EntityBuilder":
        self._entity_id = entity_id
        return self

    def confidence(self, confidence: Optional[float]) -> "EntityBuilder":
        self._confidence = confidence
        return self

    def sentiment(self, sentiment: CategorizerResult) -> "EntityBuilder":
        """Append one sentiment result."""
        if self._sentiment is None:
            self._sentiment = []
        self._sentiment.append(sentiment)
        return self

    def sentiments(self, sentiment: Optional[List[CategorizerResult]]) -> "EntityBuilder":
        """Replace all sentiment results; None marks sentiment as not computed."""
        self._sentiment = list_or_none(
            sentiment, self.attribute_class.__name__, "sentiment"
        )
        return self
