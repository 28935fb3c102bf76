"""
Unit tests for the shared attribute contract: spans, immutability,
the extension bag, repr() and to_dict().
"""
import copy
import dataclasses
import logging
import pickle

import pytest

from adm.config import settings
from adm.models.base import Attribute, BaseAttribute
from adm.models.categorizer import CategorizerResultBuilder
from adm.models.concept import Concept, ConceptBuilder
from adm.models.entity import EntityBuilder
from adm.models.errors import AttributeValidationError, InvalidSpanError
from adm.models.language import LanguageCode
from adm.models.language_detection import LanguageDetectionBuilder
from adm.models.mention import MentionBuilder
from adm.models.morpho import HanMorphoAnalysisBuilder, MorphoAnalysisBuilder
from adm.models.token import Token, TokenBuilder


class TestSpanValidation:
    def test_valid_span(self):
        token = TokenBuilder(3, 7, "beam").build()
        assert token.start_offset == 3
        assert token.end_offset == 7
        assert token.length == 4

    def test_empty_span_allowed(self):
        assert TokenBuilder(5, 5, "").build().length == 0

    @pytest.mark.parametrize("start, end", [(7, 3), (-1, 4), (-3, -1)])
    def test_invalid_span_rejected(self, start, end):
        with pytest.raises(InvalidSpanError) as exc_info:
            TokenBuilder(start, end, "beam").build()
        assert exc_info.value.start_offset == start
        assert exc_info.value.end_offset == end

    @pytest.mark.parametrize("start, end", [(0.0, 4), ("0", 4), (0, None), (False, 1)])
    def test_non_integer_offsets_rejected(self, start, end):
        with pytest.raises(InvalidSpanError):
            MentionBuilder(start, end).build()

    def test_every_positional_variant_is_checked(self):
        with pytest.raises(InvalidSpanError):
            MorphoAnalysisBuilder(4, 2).build()
        with pytest.raises(InvalidSpanError):
            HanMorphoAnalysisBuilder(4, 2).build()
        with pytest.raises(InvalidSpanError):
            LanguageDetectionBuilder(4, 2).build()
        with pytest.raises(InvalidSpanError):
            Token(start_offset=4, end_offset=2, text="x")

    def test_rejection_is_logged(self, caplog):
        with caplog.at_level(logging.WARNING, logger="adm.models.base"):
            with pytest.raises(InvalidSpanError):
                TokenBuilder(9, 1, "beam").build()
        assert "Invalid span" in caplog.text

    def test_overlaps_and_covers(self):
        outer = MentionBuilder(0, 10).build()
        inner = MentionBuilder(2, 5).build()
        adjacent = MentionBuilder(10, 12).build()
        assert outer.covers(inner)
        assert not inner.covers(outer)
        assert outer.overlaps(inner)
        assert not outer.overlaps(adjacent)


class TestRequiredFields:
    def test_token_text_required(self):
        with pytest.raises(AttributeValidationError):
            TokenBuilder(0, 1, None).build()

    def test_concept_name_required(self):
        with pytest.raises(AttributeValidationError):
            ConceptBuilder(None, "Q1").build()

    def test_abstract_bases_cannot_be_built(self):
        with pytest.raises(TypeError):
            BaseAttribute()
        with pytest.raises(TypeError):
            Attribute(start_offset=0, end_offset=1)


class TestImmutability:
    def test_fields_are_frozen(self):
        token = TokenBuilder(0, 4, "beam").build()
        with pytest.raises(dataclasses.FrozenInstanceError):
            token.text = "door"

    def test_sequences_are_tuples(self, morpho_builder):
        ma = morpho_builder().build()
        assert isinstance(ma.components, tuple)
        with pytest.raises(AttributeError):
            ma.components.append(TokenBuilder(0, 1, "x").build())

    def test_extended_properties_are_read_only(self):
        token = TokenBuilder(0, 4, "beam").extended_property("origin", "ocr").build()
        with pytest.raises(TypeError):
            token.extended_properties["origin"] = "manual"

    def test_direct_construction_copies_inputs(self):
        props = {"origin": "ocr"}
        normalized = ["beam"]
        token = Token(start_offset=0, end_offset=4, text="beam", normalized=normalized, extended_properties=props)
        props["origin"] = "manual"
        normalized.append("BEAM")
        assert token.extended_properties["origin"] == "ocr"
        assert token.normalized == ("beam",)

    def test_non_string_property_key_rejected(self):
        with pytest.raises(AttributeValidationError):
            Concept(concept="politics", extended_properties={1: "x"})


class TestRepr:
    def test_superclass_fields_first(self):
        token = TokenBuilder(0, 4, "beam").build()
        assert repr(token) == (
            "Token(start_offset=0, end_offset=4, text='beam', normalized=None, source=None)"
        )

    def test_subclass_appends_after_inherited_fields(self):
        ma = HanMorphoAnalysisBuilder(0, 1).lemma("ni").add_reading("ni3").build()
        text = repr(ma)
        assert text.startswith("HanMorphoAnalysis(start_offset=0, end_offset=1, components=None")
        assert text.endswith("raw=None, readings=['ni3'])")

    def test_null_and_empty_sequences_are_distinguishable(self):
        unset = repr(MorphoAnalysisBuilder(0, 1).build())
        empty = repr(MorphoAnalysisBuilder(0, 1).components([]).build())
        assert "components=None" in unset
        assert "components=[]" in empty

    def test_extended_properties_shown_when_present(self):
        concept = ConceptBuilder("politics", "Q7163").extended_property("kb", "wikidata").build()
        assert repr(concept) == (
            "Concept(extended_properties={'kb': 'wikidata'}, concept='politics', "
            "salience=None, concept_id='Q7163')"
        )

    def test_language_codes_shown_by_name(self):
        detection = LanguageDetectionBuilder(0, 3).add_language(LanguageCode.ENGLISH, 0.5).build()
        assert "language=[ENGLISH]" in repr(detection)

    def test_long_sequences_abbreviated(self, monkeypatch):
        monkeypatch.setattr(settings, "ADM_REPR_MAX_ITEMS", 2)
        ma = HanMorphoAnalysisBuilder(0, 1).readings(["a", "b", "c", "d"]).build()
        assert "readings=['a', 'b', ... +2 more]" in repr(ma)


class TestToDict:
    def test_token(self):
        token = TokenBuilder(0, 4, "beam").extended_property("origin", "ocr").build()
        assert token.to_dict() == {
            "kind": "token",
            "extended_properties": {"origin": "ocr"},
            "start_offset": 0,
            "end_offset": 4,
            "text": "beam",
            "normalized": None,
            "source": None,
        }

    def test_nested_attributes_rendered(self, morpho_builder):
        data = morpho_builder().build().to_dict()
        assert data["kind"] == "morphoAnalysis"
        assert [c["text"] for c in data["components"]] == ["beam", "post"]
        assert data["components"][0]["kind"] == "token"

    def test_language_codes_rendered_as_values(self):
        detection = LanguageDetectionBuilder(0, 3).add_language(LanguageCode.ENGLISH, 0.5).build()
        assert detection.to_dict()["language"] == ["eng"]


def _entity_with_bag():
    mention = MentionBuilder(0, 5, "PERSON").build()
    return (
        EntityBuilder()
        .mention(mention)
        .head_mention_index(0)
        .sentiment(CategorizerResultBuilder("pos", 0.8).build())
        .extended_property("kb", {"name": "wikidata", "ids": ["Q76"]})
        .build()
    )


ATTRIBUTE_FACTORIES = [
    lambda: TokenBuilder(0, 4, "beam").add_normalized("beam").extended_property("origin", "ocr").build(),
    lambda: MorphoAnalysisBuilder(0, 8).add_component(TokenBuilder(0, 4, "beam").build()).lemma("orange").build(),
    lambda: HanMorphoAnalysisBuilder(0, 2).add_reading("ni3").build(),
    lambda: LanguageDetectionBuilder(0, 9).add_language(LanguageCode.KOREAN, 0.99).build(),
    lambda: MentionBuilder(0, 5, "PERSON").confidence(0.5).build(),
    lambda: CategorizerResultBuilder("neu", 0.2).build(),
    _entity_with_bag,
    lambda: ConceptBuilder("politics", "Q7163").salience(0.3).build(),
]


class TestCopyAndPickle:
    @pytest.mark.parametrize("make", ATTRIBUTE_FACTORIES)
    def test_pickle_round_trip(self, make):
        attribute = make()
        restored = pickle.loads(pickle.dumps(attribute))
        assert restored == attribute
        assert hash(restored) == hash(attribute)
        with pytest.raises(TypeError):
            restored.extended_properties["origin"] = "manual"

    @pytest.mark.parametrize("make", ATTRIBUTE_FACTORIES)
    def test_deepcopy(self, make):
        attribute = make()
        copied = copy.deepcopy(attribute)
        assert copied == attribute
        assert copied is not attribute

    def test_attribute_valued_bag_entry(self):
        inner = ConceptBuilder("politics", "Q7163").build()
        token = TokenBuilder(0, 4, "beam").extended_property("concept", inner).build()
        assert pickle.loads(pickle.dumps(token)).extended_properties["concept"] == inner


class TestSequenceArguments:
    def test_string_rejected_on_direct_construction(self, caplog):
        with caplog.at_level(logging.WARNING, logger="adm.models.base"):
            with pytest.raises(AttributeValidationError):
                Token(start_offset=0, end_offset=1, text="x", normalized="x")
        assert "normalized" in caplog.text

    def test_list_bag_values_stored_as_tuples(self):
        token = TokenBuilder(0, 4, "beam").extended_property("span", [1, [2, 3]]).build()
        assert token.extended_properties["span"] == (1, (2, 3))
