"""Pure text normalization for cross-catalog comparison.

Every function here is total: ``None`` or empty input yields empty output and
nothing raises.
"""

import re
import unicodedata

# Applied in order; each pass re-splits the output of the previous one.
ARTIST_SEPARATORS: tuple[re.Pattern[str], ...] = (
    re.compile(r"\s+&\s+", re.IGNORECASE),
    re.compile(r"\s+feat\.?\s+", re.IGNORECASE),
    re.compile(r"\s+featuring\s+", re.IGNORECASE),
    re.compile(r"\s+ft\.?\s+", re.IGNORECASE),
    re.compile(r"\s+with\s+", re.IGNORECASE),
    re.compile(r"\s+x\s+", re.IGNORECASE),
    re.compile(r"\s+\+\s+", re.IGNORECASE),
    re.compile(r"\s*,\s*"),
    re.compile(r"\s*;\s*"),
)

_NON_WORD_SPACE_PATTERN = re.compile(r"[^\w\s]")
_MULTISPACE_PATTERN = re.compile(r"\s+")
_CREDIT_PARENS_PATTERN = re.compile(
    r"\((?:feat\.?|featuring|ft\.?|with)\s[^)]*\)", re.IGNORECASE
)
_QUOTES_PATTERN = re.compile(r"[\"“”'‘’`]")


def _strip_diacritics(text: str) -> str:
    decomposed = unicodedata.normalize("NFD", text)
    return "".join(c for c in decomposed if not unicodedata.combining(c))


def normalize_for_comparison(value: str | None) -> str:
    """Aggressive normalization used before any similarity computation.

    Lowercases, strips combining diacritical marks, turns punctuation into
    spaces and collapses whitespace. Idempotent.
    """
    if not value:
        return ""
    text = _strip_diacritics(value.lower())
    text = _NON_WORD_SPACE_PATTERN.sub(" ", text)
    return _MULTISPACE_PATTERN.sub(" ", text).strip()


def parse_artists(value: str | None) -> list[str]:
    """Split a combined artist credit into individual artist names.

    >>> parse_artists("A & B feat. C")
    ['A', 'B', 'C']
    """
    if not value or not isinstance(value, str):
        return []

    artists = [value.strip()]
    for separator in ARTIST_SEPARATORS:
        artists = [
            part.strip()
            for artist in artists
            for part in separator.split(artist)
            if part.strip()
        ]

    # dict preserves first-seen order
    return list(dict.fromkeys(artists))


def normalize_search_term(value: str | None) -> str:
    """Light normalization for free-text catalog queries.

    Keeps edition tags (they help the catalog's own ranking) but drops
    parenthesised featured-artist credits and quote characters.
    """
    if not value:
        return ""
    text = _CREDIT_PARENS_PATTERN.sub("", value)
    text = text.lower().replace("&", " and ")
    text = _QUOTES_PATTERN.sub("", text)
    return _MULTISPACE_PATTERN.sub(" ", text).strip()
