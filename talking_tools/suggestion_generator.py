"""
SuggestionGenerator: turn a base phrase into a short list of activities.

Catalog matches come first (full phrase, then its first word), followed by
three fallbacks built from the base phrase itself.  The result is
deduplicated by exact string equality and capped at MAX_SUGGESTIONS.
"""

from __future__ import annotations

from typing import List, Optional

from .activity_catalog import DEFAULT_CATALOG, ActivityCatalog, normalize_key

MAX_SUGGESTIONS = 8


class SuggestionGenerator:
    """Produce ordered, unique activity suggestions for a base phrase."""

    def __init__(self, catalog: Optional[ActivityCatalog] = None) -> None:
        self.catalog = catalog if catalog is not None else DEFAULT_CATALOG

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def generate(self, base: str) -> List[str]:
        """
        Build the suggestion list for *base*.

        Args:
            base: Raw base phrase as selected or typed by the user.  Matching
                  is case-insensitive and ignores surrounding whitespace, but
                  the fallbacks reuse *base* verbatim.

        Returns:
            Between 1 and MAX_SUGGESTIONS unique strings, catalog entries
            first.  Never raises; an unknown phrase yields only fallbacks.
        """
        key = normalize_key(base)
        candidates: List[str] = []

        exact = self.catalog.lookup(key)
        if exact:
            candidates.extend(exact)

        tokens = key.split()
        if tokens:
            root = tokens[0]
            if root != key:
                by_root = self.catalog.lookup(root)
                if by_root:
                    candidates.extend(by_root)

        candidates.extend(self._fallbacks(base))
        return self._dedupe(candidates)[:MAX_SUGGESTIONS]

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _fallbacks(self, base: str) -> List[str]:
        return [base, f"think about {base}", f"set reminder for {base}"]

    def _dedupe(self, items: List[str]) -> List[str]:
        """Drop repeated strings, keeping the first occurrence."""
        return list(dict.fromkeys(items))


_DEFAULT_GENERATOR = SuggestionGenerator()


def generate_suggestions(base_phrase: str) -> List[str]:
    """Suggestions for *base_phrase* from the built-in catalog."""
    return _DEFAULT_GENERATOR.generate(base_phrase)
