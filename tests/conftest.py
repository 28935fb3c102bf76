"""
Shared test fixtures for the data model test suite.
"""
import pytest

from adm.models.categorizer import CategorizerResultBuilder
from adm.models.mention import MentionBuilder
from adm.models.morpho import MorphoAnalysisBuilder
from adm.models.token import TokenBuilder


def add_components(builder, *texts):
    """
    Morpho analysis components are plain tokens; token equality is
    covered on its own, so basic tokens are enough here.
    """
    for text in texts:
        builder.add_component(TokenBuilder(0, len(text), text).build())
    return builder


# ==========================================================================
# Morphological analysis
# ==========================================================================

@pytest.fixture
def morpho_builder():
    """Factory for the reference analysis: beam+post / orange / woof / cooked."""

    def _make(components=("beam", "post"), lemma="orange", part_of_speech="woof", raw="cooked"):
        builder = MorphoAnalysisBuilder(0, 8)
        if components is not None:
            add_components(builder, *components)
        return builder.lemma(lemma).part_of_speech(part_of_speech).raw(raw)

    return _make


# ==========================================================================
# Mentions & sentiment
# ==========================================================================

@pytest.fixture
def mentions():
    # "Barack Obama met Obama's staff. The president left."
    return [
        MentionBuilder(0, 12, "PERSON").source("statistical").confidence(0.91).build(),
        MentionBuilder(17, 22, "PERSON").source("statistical").confidence(0.64).build(),
        MentionBuilder(32, 45, "PERSON").source("coref").build(),
    ]


@pytest.fixture
def positive_sentiment():
    return CategorizerResultBuilder("pos", 0.83).confidence(0.7).build()
