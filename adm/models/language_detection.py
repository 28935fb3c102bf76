"""
LanguageDetection: candidate languages for a region of text.

language and confidence are parallel: language[i] was detected with
confidence[i]. Both are stored as tuples of equal length.
"""
import logging
import numbers
from dataclasses import dataclass
from typing import Any, ClassVar, List, Optional, Tuple

from adm.config.constants import KIND_LANGUAGE_DETECTION, UNKNOWN_LANGUAGE_TAGS
from adm.models.base import Attribute, AttributeBuilder, ToStringHelper, freeze_sequence
from adm.models.errors import AttributeValidationError
from adm.models.language import LanguageCode

logger = logging.getLogger(__name__)


def _coerce_language(value: Any, attribute_type: str) -> LanguageCode:
    """
    LanguageCode for *value*; tags that do not resolve are rejected.

    Explicit "unknown" tags ("xxx", "und", ...) still map to UNKNOWN.
    """
    if isinstance(value, LanguageCode):
        return value
    if isinstance(value, str):
        code = LanguageCode.from_tag(value)
        if code is not LanguageCode.UNKNOWN or value.strip().lower() in UNKNOWN_LANGUAGE_TAGS:
            return code
    logger.warning("Unresolved language %r on %s", value, attribute_type)
    raise AttributeValidationError(attribute_type, f"unknown language {value!r}")


def _coerce_confidence(value: Any, attribute_type: str) -> float:
    if isinstance(value, numbers.Real) and not isinstance(value, bool):
        return float(value)
    logger.warning("Non-numeric confidence %r on %s", value, attribute_type)
    raise AttributeValidationError(attribute_type, f"confidence must be a number, got {value!r}")


@dataclass(frozen=True, kw_only=True, repr=False)
class LanguageDetection(Attribute):
    KIND: ClassVar[str] = KIND_LANGUAGE_DETECTION

    language: Tuple[LanguageCode, ...] = ()
    confidence: Tuple[float, ...] = ()

    def __post_init__(self) -> None:
        super().__post_init__()
        name = type(self).__name__
        languages = tuple(
            _coerce_language(code, name)
            for code in freeze_sequence(self.language, name, "language") or ()
        )
        confidences = tuple(
            _coerce_confidence(c, name)
            for c in freeze_sequence(self.confidence, name, "confidence") or ()
        )
        if len(languages) != len(confidences):
            logger.warning(
                "Language/confidence length mismatch (%d vs %d)", len(languages), len(confidences)
            )
            raise AttributeValidationError(
                type(self).__name__,
                f"language and confidence must have the same length "
                f"({len(languages)} != {len(confidences)})",
            )
        object.__setattr__(self, "language", languages)
        object.__setattr__(self, "confidence", confidences)

    def detected(self) -> List[Tuple[LanguageCode, float]]:
        """(language, confidence) pairs in stored order."""
        return list(zip(self.language, self.confidence))

    def best(self) -> Optional[Tuple[LanguageCode, float]]:
        """Highest-confidence pair; ties go to the earlier entry."""
        pairs = self.detected()
        if not pairs:
            return None
        return max(pairs, key=lambda pair: pair[1])

    def _to_string_helper(self) -> ToStringHelper:
        return (
            super()
            ._to_string_helper()
            .add("language", self.language)
            .add("confidence", self.confidence)
        )


class LanguageDetectionBuilder(AttributeBuilder[LanguageDetection]):
    attribute_class = LanguageDetection

    def __init__(self, start_offset: int, end_offset: int) -> None:
        super().__init__(start_offset, end_offset)
        self._language: List[LanguageCode] = []
        self._confidence: List[float] = []

    @classmethod
    def from_attribute(cls, source: LanguageDetection) -> "LanguageDetectionBuilder":
        builder = cls(source.start_offset, source.end_offset)
        builder._copy_from(source)
        return builder

    def _copy_from(self, source: LanguageDetection) -> None:
        super()._copy_from(source)
        self._language = list(source.language)
        self._confidence = list(source.confidence)

    def _field_values(self) -> dict:
        values = super()._field_values()
        values.update(language=self._language, confidence=self._confidence)
        return values

    def add_language(self, language: LanguageCode, confidence: float) -> "LanguageDetectionBuilder":
        """Append one detected language with its confidence."""
        self._language.append(language)
        self._confidence.append(confidence)
        return self

    def languages(
        self, language: List[LanguageCode], confidence: List[float]
    ) -> "LanguageDetectionBuilder":
        """Replace both parallel sequences."""
        self._language = list(language)
        self._confidence = list(confidence)
        return self
