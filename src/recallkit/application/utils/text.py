import math
import re
import unicodedata

from recallkit.domain.constants import AUTO_TOLERANCE_MIN_LEN, AUTO_TOLERANCE_POINT_INCR

# ---------- Cleanup helpers ----------

_PAREN_ASIDE = re.compile(r"[(（].*?[)）]|\[.*?\]", re.DOTALL)
_WHITESPACE_RUN = re.compile(r"\s{2,}")
_FINAL_PUNCTUATION = re.compile(r"[.,!?]$")
_DIGIT = re.compile(r"\d")


def remove_parens(text: str) -> str:
    """Strip parenthetical and bracketed asides, then collapse whitespace.

    "먹어요 (to eat)" -> "먹어요". Applying it twice gives the same result.
    """
    out = _PAREN_ASIDE.sub("", text or "")
    out = _WHITESPACE_RUN.sub(" ", out)
    return out.strip()


def strip_final_punctuation(text: str) -> str:
    return _FINAL_PUNCTUATION.sub("", text or "")


def _strip_diacritics(text: str) -> str:
    # Only the combining diacritical block is dropped so that kana voicing
    # marks and Hangul jamo recompose unchanged.
    decomposed = unicodedata.normalize("NFKD", text)
    kept = "".join(ch for ch in decomposed if not "\u0300" <= ch <= "\u036f")
    return unicodedata.normalize("NFC", kept)


def normalize(text: str | None) -> str:
    """Reduce an answer to the form used for comparison.

    Removes asides, case, diacritics, punctuation and all whitespace, so
    spacing differences in the target script never count as errors.
    """
    if not text:
        return ""
    out = remove_parens(text)
    out = unicodedata.normalize("NFKC", out).casefold()
    out = _strip_diacritics(out)
    return "".join(
        ch
        for ch in out
        if not ch.isspace() and not unicodedata.category(ch).startswith("P")
    )


# ---------- Edit distance ----------


def levenshtein(a: str, b: str) -> int:
    """Insertion/deletion/substitution distance between two strings."""
    if not a:
        return len(b)
    if not b:
        return len(a)
    if len(a) < len(b):
        a, b = b, a

    previous = list(range(len(b) + 1))
    for i, ca in enumerate(a, start=1):
        current = [i]
        for j, cb in enumerate(b, start=1):
            cost = 0 if ca == cb else 1
            current.append(min(previous[j] + 1, current[j - 1] + 1, previous[j - 1] + cost))
        previous = current
    return previous[-1]


# ---------- Comparison ----------


def compare(expected: str, actual: str, tolerance: int = 0) -> bool:
    """Decide whether `actual` is an acceptable rendering of `expected`.

    With tolerance 0 the normalized forms must be identical; otherwise they may
    differ by up to `tolerance` edits. Never raises.
    """
    left = normalize(expected)
    right = normalize(actual)
    if left == right:
        return True

    budget = max(0, int(tolerance or 0))
    if budget == 0 or abs(len(left) - len(right)) > budget:
        return False
    return levenshtein(left, right) <= budget


def length_tolerance(expected: str, actual: str) -> int:
    """Edit budget that grows with answer length (one edit per ten characters
    beyond the first four), doubled when numbers are involved.
    """
    longest = max(len(normalize(expected)), len(normalize(actual)))
    budget = math.ceil(max(longest - AUTO_TOLERANCE_MIN_LEN, 0) / AUTO_TOLERANCE_POINT_INCR)
    if _DIGIT.search((expected or "") + (actual or "")):
        budget *= 2
    return budget
