"""
Concept: a high-level topic of a document.

A concept can be an abstract or concrete topic that is highly relevant to
the document. Concepts may or may not be referenced explicitly in the
text, so they do not cover any span. Each concept provides its name, a
salience value and an ID associating it with an external knowledge base
(e.g. Q23 from Wikidata).
"""
from dataclasses import dataclass
from typing import ClassVar, Optional

from adm.config.constants import KIND_CONCEPT
from adm.models.base import BaseAttribute, BaseAttributeBuilder, ToStringHelper, validate_required


@dataclass(frozen=True, kw_only=True, repr=False)
class Concept(BaseAttribute):
    KIND: ClassVar[str] = KIND_CONCEPT

    concept: str
    salience: Optional[float] = None
    concept_id: Optional[str] = None

    def __post_init__(self) -> None:
        super().__post_init__()
        validate_required(type(self).__name__, "concept", self.concept, str)

    def _to_string_helper(self) -> ToStringHelper:
        return (
            super()
            ._to_string_helper()
            .add("concept", self.concept)
            .add("salience", self.salience)
            .add("concept_id", self.concept_id)
        )


class ConceptBuilder(BaseAttributeBuilder[Concept]):
    """Builder for concepts; the name and the knowledge-base ID are required."""

    attribute_class = Concept

    def __init__(self, concept: str, concept_id: Optional[str]) -> None:
        super().__init__()
        self._concept = concept
        self._salience: Optional[float] = None
        self._concept_id = concept_id

    @classmethod
    def from_attribute(cls, source: Concept) -> "ConceptBuilder":
        builder = cls(source.concept, source.concept_id)
        builder._copy_from(source)
        return builder

    def _copy_from(self, source: Concept) -> None:
        super()._copy_from(source)
        self._salience = source.salience

    def _field_values(self) -> dict:
        values = super()._field_values()
        values.update(concept=self._concept, salience=self._salience, concept_id=self._concept_id)
        return values

    def concept(self, concept: str) -> "ConceptBuilder":
        self._concept = concept
        return self

    def salience(self, salience: Optional[float]) -> "ConceptBuilder":
        self._salience = salience
        return self

    def concept_id(self, concept_id: Optional[str]) -> "ConceptBuilder":
        self._concept_id = concept_id
        return self
