"""
CategorizerResult: one label assigned by a categorizer (sentiment, topic).
"""
from dataclasses import dataclass
from typing import ClassVar, Optional

from adm.config.constants import KIND_CATEGORIZER_RESULT
from adm.models.base import BaseAttribute, BaseAttributeBuilder, ToStringHelper, validate_required


@dataclass(frozen=True, kw_only=True, repr=False)
class CategorizerResult(BaseAttribute):
    """A label with its raw score and, optionally, a calibrated confidence."""

    KIND: ClassVar[str] = KIND_CATEGORIZER_RESULT

    label: str
    score: Optional[float] = None
    confidence: Optional[float] = None

    def __post_init__(self) -> None:
        super().__post_init__()
        validate_required(type(self).__name__, "label", self.label, str)

    def _to_string_helper(self) -> ToStringHelper:
        return (
            super()
            ._to_string_helper()
            .add("label", self.label)
            .add("score", self.score)
            .add("confidence", self.confidence)
        )


class CategorizerResultBuilder(BaseAttributeBuilder[CategorizerResult]):
    attribute_class = CategorizerResult

    def __init__(self, label: str, score: Optional[float] = None) -> None:
        super().__init__()
        self._label = label
        self._score = score
        self._confidence: Optional[float] = None

    @classmethod
    def from_attribute(cls, source: CategorizerResult) -> "CategorizerResultBuilder":
        builder = cls(source.label, source.score)
        builder._copy_from(source)
        return builder

    def _copy_from(self, source: CategorizerResult) -> None:
        super()._copy_from(source)
        self._confidence = source.confidence

    def _field_values(self) -> dict:
        values = super()._field_values()
        values.update(label=self._label, score=self._score, confidence=self._confidence)
        return values

    def label(self, label: str) -> "CategorizerResultBuilder":
        self._label = label
        return self

    def score(self, score: Optional[float]) -> "CategorizerResultBuilder":
        self._score = score
        return self

    def confidence(self, confidence: Optional[float]) -> "CategorizerResultBuilder":
        self._confidence = confidence
        return self
