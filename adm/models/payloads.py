"""
Typed Pydantic models for the dict interchange of attributes.

Every attribute renders itself with to_dict(); the models below validate
such dicts (shape and types, discriminated on the "kind" key) before they
are rebuilt through the attribute builders. Semantic checks (span bounds,
head mention index, parallel language lists) stay with the attributes, so
a payload that passes here can still raise AttributeValidationError.
Attributes stored in an extension bag come back as attributes, and lists
in a bag come back as tuples, so a round trip yields an equal attribute.
"""
from __future__ import annotations

import logging
from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator

from adm.config.constants import (
    KIND_CATEGORIZER_RESULT,
    KIND_CONCEPT,
    KIND_ENTITY,
    KIND_HAN_MORPHO_ANALYSIS,
    KIND_KEY,
    KIND_LANGUAGE_DETECTION,
    KIND_MENTION,
    KIND_MORPHO_ANALYSIS,
    KIND_TOKEN,
)
from adm.models.base import BaseAttribute
from adm.models.categorizer import CategorizerResult, CategorizerResultBuilder
from adm.models.concept import Concept, ConceptBuilder
from adm.models.entity import Entity, EntityBuilder
from adm.models.language_detection import LanguageDetection, LanguageDetectionBuilder
from adm.models.mention import Mention, MentionBuilder
from adm.models.morpho import (
    HanMorphoAnalysis,
    HanMorphoAnalysisBuilder,
    MorphoAnalysis,
    MorphoAnalysisBuilder,
)
from adm.models.token import Token, TokenBuilder

logger = logging.getLogger(__name__)


# =============================================================================
# Payload models
# =============================================================================


class _Payload(BaseModel):
    model_config = ConfigDict(extra="forbid")

    extended_properties: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("extended_properties")
    @classmethod
    def revive_attributes(cls, properties: Dict[str, Any]) -> Dict[str, Any]:
        return {key: _revive(value) for key, value in properties.items()}


def _revive(value: Any) -> Any:
    """Turn nested to_dict() renderings in an extension bag back into attributes."""
    if isinstance(value, dict):
        if value.get(KIND_KEY) in _PAYLOAD_KINDS:
            return attribute_from_dict(value)
        return {k: _revive(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_revive(v) for v in value]
    return value


class _SpanPayload(_Payload):
    start_offset: int
    end_offset: int


class TokenPayload(_SpanPayload):
    kind: Literal["token"] = KIND_TOKEN
    text: str
    normalized: Optional[List[str]] = None
    source: Optional[str] = None

    def to_attribute(self) -> Token:
        return (
            TokenBuilder(self.start_offset, self.end_offset, self.text)
            .normalized(self.normalized)
            .source(self.source)
            .extended_properties(self.extended_properties)
            .build()
        )


class MorphoAnalysisPayload(_SpanPayload):
    kind: Literal["morphoAnalysis"] = KIND_MORPHO_ANALYSIS
    components: Optional[List[TokenPayload]] = None
    lemma: Optional[str] = None
    part_of_speech: Optional[str] = None
    raw: Optional[str] = None

    def fill_builder(self, builder: MorphoAnalysisBuilder) -> MorphoAnalysisBuilder:
        components = None
        if self.components is not None:
            components = [c.to_attribute() for c in self.components]
        return (
            builder.components(components)
            .lemma(self.lemma)
            .part_of_speech(self.part_of_speech)
            .raw(self.raw)
            .extended_properties(self.extended_properties)
        )

    def to_attribute(self) -> MorphoAnalysis:
        return self.fill_builder(MorphoAnalysisBuilder(self.start_offset, self.end_offset)).build()


class HanMorphoAnalysisPayload(MorphoAnalysisPayload):
    kind: Literal["hanMorphoAnalysis"] = KIND_HAN_MORPHO_ANALYSIS
    readings: Optional[List[str]] = None

    def to_attribute(self) -> HanMorphoAnalysis:
        builder = HanMorphoAnalysisBuilder(self.start_offset, self.end_offset)
        self.fill_builder(builder)
        return builder.readings(self.readings).build()


class LanguageDetectionPayload(_SpanPayload):
    kind: Literal["languageDetection"] = KIND_LANGUAGE_DETECTION
    language: List[str] = Field(default_factory=list)
    confidence: List[float] = Field(default_factory=list)

    def to_attribute(self) -> LanguageDetection:
        return (
            LanguageDetectionBuilder(self.start_offset, self.end_offset)
            .languages(self.language, self.confidence)
            .extended_properties(self.extended_properties)
            .build()
        )


class MentionPayload(_SpanPayload):
    kind: Literal["mention"] = KIND_MENTION
    entity_type: Optional[str] = None
    normalized: Optional[str] = None
    source: Optional[str] = None
    subsource: Optional[str] = None
    confidence: Optional[float] = None

    def to_attribute(self) -> Mention:
        return (
            MentionBuilder(self.start_offset, self.end_offset, self.entity_type)
            .normalized(self.normalized)
            .source(self.source)
            .subsource(self.subsource)
            .confidence(self.confidence)
            .extended_properties(self.extended_properties)
            .build()
        )


class CategorizerResultPayload(_Payload):
    kind: Literal["categorizerResult"] = KIND_CATEGORIZER_RESULT
    label: str
    score: Optional[float] = None
    confidence: Optional[float] = None

    def to_attribute(self) -> CategorizerResult:
        return (
            CategorizerResultBuilder(self.label, self.score)
            .confidence(self.confidence)
            .extended_properties(self.extended_properties)
            .build()
        )


class EntityPayload(_Payload):
    kind: Literal["entity"] = KIND_ENTITY
    mentions: Optional[List[MentionPayload]] = None
    head_mention_index: Optional[int] = None
    type: Optional[str] = None
    entity_id: Optional[str] = None
    confidence: Optional[float] = None
    sentiment: Optional[List[CategorizerResultPayload]] = None

    def to_attribute(self) -> Entity:
        mentions = None
        if self.mentions is not None:
            mentions = [m.to_attribute() for m in self.mentions]
        sentiment = None
        if self.sentiment is not None:
            sentiment = [s.to_attribute() for s in self.sentiment]
        return (
            EntityBuilder()
            .mentions(mentions)
            .head_mention_index(self.head_mention_index)
            .type(self.type)
            .entity_id(self.entity_id)
            .confidence(self.confidence)
            .sentiments(sentiment)
            .extended_properties(self.extended_properties)
            .build()
        )


class ConceptPayload(_Payload):
    kind: Literal["concept"] = KIND_CONCEPT
    concept: str
    salience: Optional[float] = None
    concept_id: Optional[str] = None

    def to_attribute(self) -> Concept:
        return (
            ConceptBuilder(self.concept, self.concept_id)
            .salience(self.salience)
            .extended_properties(self.extended_properties)
            .build()
        )


AttributePayload = Annotated[
    Union[
        TokenPayload,
        MorphoAnalysisPayload,
        HanMorphoAnalysisPayload,
        LanguageDetectionPayload,
        MentionPayload,
        CategorizerResultPayload,
        EntityPayload,
        ConceptPayload,
    ],
    Field(discriminator="kind"),
]

_PAYLOAD_KINDS = frozenset(
    {
        KIND_TOKEN,
        KIND_MORPHO_ANALYSIS,
        KIND_HAN_MORPHO_ANALYSIS,
        KIND_LANGUAGE_DETECTION,
        KIND_MENTION,
        KIND_CATEGORIZER_RESULT,
        KIND_ENTITY,
        KIND_CONCEPT,
    }
)

_ATTRIBUTE_ADAPTER: TypeAdapter = TypeAdapter(AttributePayload)


# =============================================================================
# Entry point
# =============================================================================


def attribute_from_dict(data: dict) -> BaseAttribute:
    """
    Rebuild an attribute from its to_dict() rendering.

    Args:
        data: Dict with a "kind" discriminator and the attribute's fields.

    Returns:
        The frozen attribute.

    Raises:
        pydantic.ValidationError: the dict has the wrong shape or types.
        AttributeValidationError: the values break an attribute invariant.
    """
    payload = _ATTRIBUTE_ADAPTER.validate_python(data)
    logger.debug("Validated %s payload", payload.kind)
    return payload.to_attribute()
