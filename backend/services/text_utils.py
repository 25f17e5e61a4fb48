"""Text normalization, tokenization and small numeric helpers.

Tokenization prefers nltk's word segmenter, which handles Korean
spacing reasonably, and falls back to a regex split when the punkt
tokenizer data is not installed.
"""

import logging
import re
from functools import lru_cache
from typing import Iterable, Sequence

from nltk.tokenize import RegexpTokenizer, word_tokenize

logger = logging.getLogger(__name__)

_SPLIT_TOKENIZER = RegexpTokenizer(r"[^a-z0-9가-힣+./#-]+", gaps=True)
_WORD_LIKE_RE = re.compile(r"[0-9a-z가-힣]")
_ASCII_KEYWORD_RE = re.compile(r"^[a-z0-9.+/#-]+$")
_SPACES_RE = re.compile(r"[ \t]+")


def normalize(text: str | None) -> str:
    """Trim, collapse spaces and tabs, keep line breaks. None becomes ''."""
    if not isinstance(text, str):
        return ""
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    text = _SPACES_RE.sub(" ", text)
    return "\n".join(line.strip() for line in text.split("\n")).strip()


@lru_cache(maxsize=1)
def _segmenter_available() -> bool:
    try:
        word_tokenize("ok")
    except LookupError:
        logger.info("nltk punkt data not installed, using regex tokenizer")
        return False
    return True


def tokenize(text: str | None) -> list[str]:
    """Lower-case and split text into non-empty word-like tokens."""
    if not isinstance(text, str) or not text.strip():
        return []
    lowered = text.lower()
    if _segmenter_available():
        tokens = [t.strip() for t in word_tokenize(lowered)]
        return [t for t in tokens if t and _WORD_LIKE_RE.search(t)]
    return [t.strip() for t in _SPLIT_TOKENIZER.tokenize(lowered) if t.strip()]


def similarity(tokens_a: Iterable[str], tokens_b: Iterable[str]) -> float:
    """Jaccard index over token sets. Both empty is 1.0, one empty is 0.0."""
    a, b = set(tokens_a), set(tokens_b)
    if not a and not b:
        return 1.0
    if not a or not b:
        return 0.0
    return len(a & b) / len(a | b)


def has_word(tokens_or_text: Sequence[str] | str, keyword: str) -> bool:
    """Check for a keyword in a token list or in raw text.

    ASCII keywords are matched on alphanumeric boundaries so "java"
    does not hit inside "javascript". Korean keywords use containment.
    """
    k = (keyword or "").lower().strip()
    if not k:
        return False
    if isinstance(tokens_or_text, (list, tuple)):
        if " " in k:
            return k in " ".join(tokens_or_text)
        return k in tokens_or_text
    text = (tokens_or_text or "").lower()
    if _ASCII_KEYWORD_RE.match(k):
        pattern = rf"(^|[^a-z0-9]){re.escape(k)}([^a-z0-9]|$)"
        return re.search(pattern, text, re.IGNORECASE) is not None
    return k in text


def clamp(x: float, lo: float = 0.0, hi: float = 1.0) -> float:
    try:
        n = float(x)
    except (TypeError, ValueError):
        return lo
    if n != n:  # NaN
        return lo
    return min(hi, max(lo, n))


def clamp01(x: float) -> float:
    return clamp(x, 0.0, 1.0)


def uniq(items: Iterable[str]) -> list[str]:
    """Order-preserving de-duplication, dropping blanks."""
    seen: set[str] = set()
    out: list[str] = []
    for item in items:
        s = str(item).strip() if item is not None else ""
        if not s or s in seen:
            continue
        seen.add(s)
        out.append(s)
    return out


def score_to_label(score: int) -> str:
    if score <= 2:
        return "낮음"
    if score == 3:
        return "보통"
    return "높음"


def score_to_level(score: float) -> str:
    """Bucket a 0-1 risk score into low / mid / high."""
    s = clamp01(score)
    if s >= 0.67:
        return "high"
    if s >= 0.34:
        return "mid"
    return "low"
