"""Text canonicalization and synonym expansion for rule matching.

Descriptions are lowercased, stripped of diacritics and punctuation, and
optionally expanded with French domain synonyms so that rule patterns and
keywords can match loosely written transaction labels.
"""

from __future__ import annotations

import logging
from typing import Optional

from recova.domain.shared.bounded_cache import BoundedLRUCache
from recova.domain.shared.text import canonicalize

logger = logging.getLogger(__name__)

DEFAULT_CACHE_SIZE = 1000
MIN_KEYWORD_LENGTH = 3

_RAW_SYNONYMS: dict[str, list[str]] = {
    # Tourism vehicles
    "voiture": ["auto", "automobile", "vehicule", "vp", "berline", "citadine", "sedan"],
    "tourisme": ["particulier", "prive", "personnel"],
    # Utility vehicles
    "utilitaire": ["vu", "fourgon", "fourgonnette", "camionnette", "pick-up", "pickup"],
    "camion": ["poids-lourd", "pl", "truck"],
    # Fuel
    "carburant": ["essence", "gasoil", "gas-oil", "diesel", "fuel"],
    "essence": ["super", "sp95", "sp98", "sans-plomb"],
    "gasoil": ["gas-oil", "diesel", "gazole"],
    # Representation
    "restaurant": ["resto", "restauration", "repas"],
    "representation": ["reception", "accueil", "hospitalite"],
    "cadeaux": ["cadeau", "present", "don"],
    # Luxury
    "luxe": ["somptuaire", "haut-de-gamme", "premium", "prestige"],
    "golf": ["green", "parcours-golf"],
    "yachting": ["yacht", "bateau-plaisance", "voilier"],
    "chasse": ["cynegetique", "safari"],
    "peche": ["peche-sportive", "peche-loisir"],
    # Personal
    "personnel": ["prive", "perso", "individuel"],
    "dirigeant": ["gerant", "patron", "pdg", "directeur", "dg"],
    "famille": ["familial", "conjoint", "epoux", "enfant"],
}

STOP_WORDS = frozenset(
    {
        "le", "la", "les", "un", "une", "des", "de", "du", "et", "ou", "pour",
        "dans", "sur", "avec", "sans", "par", "a", "au", "aux",
    },
)


def _build_synonym_table(raw: dict[str, list[str]]) -> dict[str, tuple[str, ...]]:
    # Entries are stored canonicalized so they line up with normalized text
    table: dict[str, tuple[str, ...]] = {}
    for word, synonyms in raw.items():
        key = canonicalize(word)
        canonical = (canonicalize(s) for s in synonyms)
        table[key] = tuple(dict.fromkeys(s for s in canonical if s and s != key))
    return table


SYNONYMS = _build_synonym_table(_RAW_SYNONYMS)


class TextNormalizer:
    """Normalizes free text and expands it with domain synonyms.

    ``normalize`` results are memoized in a bounded LRU cache keyed by the
    exact raw string. One instance is meant to be shared process-wide.
    """

    def __init__(
        self,
        cache_size: int = DEFAULT_CACHE_SIZE,
        synonyms: Optional[dict[str, tuple[str, ...]]] = None,
    ):
        self._cache: BoundedLRUCache[str, str] = BoundedLRUCache(cache_size)
        self._synonyms = synonyms if synonyms is not None else SYNONYMS

    def normalize(self, text: Optional[str]) -> str:
        if text is None or not text.strip():
            return ""
        return self._cache.get_or_compute(text, canonicalize)

    def expand(self, text: Optional[str]) -> str:
        """Return the normalized tokens followed by all of their synonyms.

        Order is deterministic (first occurrence wins) but not meant for
        display; the result is only used for containment matching.
        """
        tokens = self.normalize(text).split()
        expanded = dict.fromkeys(tokens)
        for token in tokens:
            expanded.update(dict.fromkeys(self._synonyms.get(token, ())))
        return " ".join(expanded)

    def contains_keyword(self, text: Optional[str], *keywords: str) -> bool:
        """True if any keyword, or one of its synonyms, occurs in the text."""
        if text is None or not keywords:
            return False

        expanded = self.expand(text)
        for keyword in keywords:
            normalized_keyword = self.normalize(keyword)
            if not normalized_keyword:
                continue
            if normalized_keyword in expanded:
                return True
            if any(syn in expanded for syn in self._synonyms.get(normalized_keyword, ())):
                return True
        return False

    def contains_all_keywords(self, text: Optional[str], *keywords: str) -> bool:
        if text is None or not keywords:
            return False
        return all(self.contains_keyword(text, keyword) for keyword in keywords)

    def contains_excluded_keyword(
        self,
        text: Optional[str],
        *excluded_keywords: str,
    ) -> bool:
        return self.contains_keyword(text, *excluded_keywords)

    def extract_keywords(self, text: Optional[str]) -> list[str]:
        words = self.normalize(text).split()
        return list(
            dict.fromkeys(
                word
                for word in words
                if len(word) >= MIN_KEYWORD_LENGTH and word not in STOP_WORDS
            ),
        )

    def similarity(self, first: Optional[str], second: Optional[str]) -> int:
        """Jaccard similarity of the two word sets, as an integer 0-100."""
        if first is None or second is None:
            return 0

        norm_first = self.normalize(first)
        norm_second = self.normalize(second)
        if norm_first == norm_second:
            return 100

        words_first = set(norm_first.split())
        words_second = set(norm_second.split())
        union = words_first | words_second
        if not union:
            return 0
        return int(len(words_first & words_second) * 100 / len(union))

    def synonyms_of(self, word: str) -> tuple[str, ...]:
        return self._synonyms.get(self.normalize(word), ())

    def clear_cache(self) -> None:
        self._cache.clear()
        logger.info("Normalization cache cleared")

    def cache_stats(self) -> dict[str, int]:
        return {"size": len(self._cache), "max_size": self._cache.capacity}

