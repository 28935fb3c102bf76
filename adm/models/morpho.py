"""
Morphological analyses: the general reading of a token and its Han variant.
"""
from dataclasses import dataclass
from typing import ClassVar, List, Optional, Tuple

from adm.config.constants import KIND_HAN_MORPHO_ANALYSIS, KIND_MORPHO_ANALYSIS
from adm.models.base import (
    Attribute,
    AttributeBuilder,
    ToStringHelper,
    freeze_sequence,
    list_or_none,
)
from adm.models.token import Token


@dataclass(frozen=True, kw_only=True, repr=False)
class MorphoAnalysis(Attribute):
    """
    One morphological reading of the text in [start_offset, end_offset).

    components lists the tokens of a decomposed form (compounds, clitics).
    None means decomposition was not computed; an empty tuple means the
    analysis has no components.
    """

    KIND: ClassVar[str] = KIND_MORPHO_ANALYSIS

    components: Optional[Tuple[Token, ...]] = None
    lemma: Optional[str] = None
    part_of_speech: Optional[str] = None
    raw: Optional[str] = None

    def __post_init__(self) -> None:
        super().__post_init__()
        object.__setattr__(
            self, "components", freeze_sequence(self.components, type(self).__name__, "components")
        )

    def _to_string_helper(self) -> ToStringHelper:
        return (
            super()
            ._to_string_helper()
            .add("components", self.components)
            .add("lemma", self.lemma)
            .add("part_of_speech", self.part_of_speech)
            .add("raw", self.raw)
        )


@dataclass(frozen=True, kw_only=True, repr=False)
class HanMorphoAnalysis(MorphoAnalysis):
    """Analysis of Chinese/Japanese text; readings are phonetic (e.g. pinyin)."""

    KIND: ClassVar[str] = KIND_HAN_MORPHO_ANALYSIS

    readings: Optional[Tuple[str, ...]] = None

    def __post_init__(self) -> None:
        super().__post_init__()
        object.__setattr__(
            self, "readings", freeze_sequence(self.readings, type(self).__name__, "readings")
        )

    def _to_string_helper(self) -> ToStringHelper:
        return super()._to_string_helper().add("readings", self.readings)


class MorphoAnalysisBuilder(AttributeBuilder[MorphoAnalysis]):
    """Builder for MorphoAnalysis; components stay None until one is added."""

    attribute_class = MorphoAnalysis

    def __init__(self, start_offset: int, end_offset: int) -> None:
        super().__init__(start_offset, end_offset)
        self._components: Optional[List[Token]] = None
        self._lemma: Optional[str] = None
        self._part_of_speech: Optional[str] = None
        self._raw: Optional[str] = None

    @classmethod
    def from_attribute(cls, source: MorphoAnalysis) -> "MorphoAnalysisBuilder":
        builder = cls(source.start_offset, source.end_offset)
        builder._copy_from(source)
        return builder

    def _copy_from(self, source: MorphoAnalysis) -> None:
        super()._copy_from(source)
        self._components = list_or_none(
            source.components, self.attribute_class.__name__, "components"
        )
        self._lemma = source.lemma
        self._part_of_speech = source.part_of_speech
        self._raw = source.raw

    def _field_values(self) -> dict:
        values = super()._field_values()
        values.update(
            components=self._components,
            lemma=self._lemma,
            part_of_speech=self._part_of_speech,
            raw=self._raw,
        )
        return values

    def add_component(self, component: Token) -> "MorphoAnalysisBuilder":
        """Append one component token."""
        if self._components is None:
            self._components = []
        self._components.append(component)
        return self

    def components(self, components: Optional[List[Token]]) -> "MorphoAnalysisBuilder":
        """Replace all components; None marks them as not computed."""
        self._components = list_or_none(
            components, self.attribute_class.__name__, "components"
        )
        return self

    def lemma(self, lemma: Optional[str]) -> "MorphoAnalysisBuilder":
        self._lemma = lemma
        return self

    def part_of_speech(self, part_of_speech: Optional[str]) -> "MorphoAnalysisBuilder":
        self._part_of_speech = part_of_speech
        return self

    def raw(self, raw: Optional[str]) -> "MorphoAnalysisBuilder":
        self._raw = raw
        return self


class HanMorphoAnalysisBuilder(MorphoAnalysisBuilder):
    """Builder for HanMorphoAnalysis; readings stay None until one is added."""

    attribute_class = HanMorphoAnalysis

    def __init__(self, start_offset: int, end_offset: int) -> None:
        super().__init__(start_offset, end_offset)
        self._readings: Optional[List[str]] = None

    @classmethod
    def from_attribute(cls, source: HanMorphoAnalysis) -> "HanMorphoAnalysisBuilder":
        builder = cls(source.start_offset, source.end_offset)
        builder._copy_from(source)
        return builder

    def _copy_from(self, source: HanMorphoAnalysis) -> None:
        super()._copy_from(source)
        self._readings = list_or_none(
            getattr(source, "readings", None), self.attribute_class.__name__, "readings"
        )

    def _field_values(self) -> dict:
        values = super()._field_values()
        values["readings"] = self._readings
        return values

    def add_reading(self, reading: str) -> "HanMorphoAnalysisBuilder":
        if self._readings is None:
            self._readings = []
        self._readings.append(reading)
        return self

    def readings(self, readings: Optional[List[str]]) -> "HanMorphoAnalysisBuilder":
        self._readings = list_or_none(
            readings, self.attribute_class.__name__, "readings"
        )
        return self
