import re
from typing import Optional

# Language & digit normalization

PERSIAN_DIGITS = dict(zip("۰۱۲۳۴۵۶۷۸۹", "0123456789"))
ARABIC_INDIC_DIGITS = dict(zip("٠١٢٣٤٥٦٧٨٩", "0123456789"))

# Arabic decimal separator, Arabic thousands separator, comma
DECIMAL_SEPARATORS = {"٫": ".", "٬": ".", ",": "."}
# full-width, box-drawing, division and fraction slashes
SLASHES = {"／": "/", "╱": "/", "∕": "/", "⁄": "/"}
# hyphen, non-breaking hyphen, figure dash, en dash, em dash, horizontal bar, minus
DASHES = {"‐": "-", "‑": "-", "‒": "-", "–": "-", "—": "-", "―": "-", "−": "-"}
ZWNJ = "\u200c"

_TRANSLATION = str.maketrans({
    **PERSIAN_DIGITS,
    **ARABIC_INDIC_DIGITS,
    **DECIMAL_SEPARATORS,
    **SLASHES,
    **DASHES,
    ZWNJ: " ",
})

_WS_RE = re.compile(r"\s+")
_NON_DATE_RE = re.compile(r"[^0-9/\-.:\s]")

_LATIN_TO_PERSIAN = str.maketrans({v: k for k, v in PERSIAN_DIGITS.items()})
_LATIN_TO_ARABIC = str.maketrans({v: k for k, v in ARABIC_INDIC_DIGITS.items()})


def normalize(text: Optional[str]) -> str:
    """
    Convert Persian/Arabic-Indic digits to ASCII and canonicalise separators.

    - decimal/thousands separators and commas become '.'
    - slash look-alikes become '/', dash look-alikes become '-'
    - any whitespace (and ZWNJ) becomes a single space, ends trimmed
    - everything else, including Persian words like "ساعت", is kept
    """
    if not text:
        return ""
    return _WS_RE.sub(" ", text.translate(_TRANSLATION)).strip()


def normalize_for_date(text: Optional[str]) -> str:
    """Strict variant for the date grammar: keeps only digits, / - . : and spaces."""
    return _NON_DATE_RE.sub("", normalize(text))


def localize_digits(text: str, locale_hint: Optional[str]) -> str:
    """Render ASCII digits in the script a `fa*` or `ar*` locale expects."""
    hint = (locale_hint or "").strip().lower()
    if hint.startswith("fa"):
        return text.translate(_LATIN_TO_PERSIAN)
    if hint.startswith("ar"):
        return text.translate(_LATIN_TO_ARABIC)
    return text
