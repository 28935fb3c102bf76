"""
Constants used across the data model.
Versioned and pinned so that dict renderings stay reproducible.
"""
from typing import Dict

# =============================================================================
# Interchange
# =============================================================================
# Key carrying the concrete attribute class in to_dict() renderings.
KIND_KEY: str = "kind"

# =============================================================================
# Attribute kinds (closed set)
# =============================================================================
KIND_TOKEN: str = "token"
KIND_MORPHO_ANALYSIS: str = "morphoAnalysis"
KIND_HAN_MORPHO_ANALYSIS: str = "hanMorphoAnalysis"
KIND_LANGUAGE_DETECTION: str = "languageDetection"
KIND_MENTION: str = "mention"
KIND_ENTITY: str = "entity"
KIND_CONCEPT: str = "concept"
KIND_CATEGORIZER_RESULT: str = "categorizerResult"

# =============================================================================
# Language tags that never resolve to a concrete language
# =============================================================================
UNKNOWN_LANGUAGE_TAGS = {"", "xx", "xxx", "und", "unknown", "zxx"}

# ISO 639-1 / 639-2 tags for which pycountry's alpha_3 differs from the
# code used by LanguageCode (bibliographic vs terminology forms).
LANGUAGE_TAG_ALIASES: Dict[str, str] = {
    "chi": "zho",
    "ger": "deu",
    "fre": "fra",
    "dut": "nld",
    "per": "fas",
    "gre": "ell",
}
