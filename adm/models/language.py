"""
LanguageCode: ISO 639-3 codes for detected and annotated languages.
"""
import logging
from enum import Enum

import pycountry

from adm.config.constants import LANGUAGE_TAG_ALIASES, UNKNOWN_LANGUAGE_TAGS

logger = logging.getLogger(__name__)


class LanguageCode(str, Enum):
    """Closed set of languages the data model can carry."""

    UNKNOWN = "xxx"
    ARABIC = "ara"
    CHINESE = "zho"
    SIMPLIFIED_CHINESE = "zhs"
    TRADITIONAL_CHINESE = "zht"
    CZECH = "ces"
    DANISH = "dan"
    DUTCH = "nld"
    ENGLISH = "eng"
    FINNISH = "fin"
    FRENCH = "fra"
    GERMAN = "deu"
    GREEK = "ell"
    HEBREW = "heb"
    HUNGARIAN = "hun"
    INDONESIAN = "ind"
    ITALIAN = "ita"
    JAPANESE = "jpn"
    KOREAN = "kor"
    NORWEGIAN = "nor"
    PERSIAN = "fas"
    POLISH = "pol"
    PORTUGUESE = "por"
    ROMANIAN = "ron"
    RUSSIAN = "rus"
    SPANISH = "spa"
    SWEDISH = "swe"
    THAI = "tha"
    TURKISH = "tur"
    UKRAINIAN = "ukr"
    URDU = "urd"
    VIETNAMESE = "vie"

    @property
    def iso639_3(self) -> str:
        return self.value

    @classmethod
    def from_tag(cls, tag: str) -> "LanguageCode":
        """
        Resolve a language tag or name to a LanguageCode.

        Accepts ISO 639-1 ("en"), ISO 639-2/B ("ger"), ISO 639-3 ("eng"),
        BCP-47 style tags with a region ("en-US") and English names
        ("English"). Anything that does not resolve to a member maps to
        UNKNOWN.
        """
        key = (tag or "").strip()
        if key.lower() in UNKNOWN_LANGUAGE_TAGS:
            return cls.UNKNOWN

        try:
            return cls(key.lower())
        except ValueError:
            pass

        primary = key.replace("_", "-").split("-")[0].lower()
        if primary in LANGUAGE_TAG_ALIASES:
            return cls(LANGUAGE_TAG_ALIASES[primary])

        lang = _lookup_code(primary)
        if lang is None and len(primary) not in (2, 3):
            # Codes are matched exactly above; only names go through lookup().
            try:
                lang = pycountry.languages.lookup(key)
            except LookupError:
                lang = None

        if lang is not None:
            try:
                return cls(lang.alpha_3)
            except ValueError:
                pass

        logger.debug("Unresolved language tag %r mapped to UNKNOWN", tag)
        return cls.UNKNOWN


def _lookup_code(code: str):
    """pycountry record for an ISO 639-1 / 639-2B / 639-3 code, or None."""
    if len(code) == 2:
        return pycountry.languages.get(alpha_2=code)
    if len(code) == 3:
        return pycountry.languages.get(alpha_3=code) or pycountry.languages.get(bibliographic=code)
    return None
