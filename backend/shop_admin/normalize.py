"""
Canonical shapes for the loosely-typed fields of an edit submission.

HTML forms send a repeated field as a list but a single checked box as a bare
value, so every identifier field is funnelled through here once instead of
being type-checked at each use.
"""
import logging
import math
import re
from typing import Any, List, Optional, Sequence, Union

logger = logging.getLogger(__name__)

_NEW_IMAGE_SEPARATOR = re.compile(r"\r\n|,")

# Accepted price spellings: decimal with optional exponent, signed Infinity,
# or hex. Python-only spellings ("1_000", "nan", "inf") become NaN.
_DECIMAL_PRICE = re.compile(r"[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?|[+-]?Infinity")
_HEX_PRICE = re.compile(r"0[xX][0-9a-fA-F]+")


def normalize_identifier_field(value: Union[None, str, Sequence[str]]) -> List[Any]:
    # An empty form field means "nothing selected".
    if value is None or value == "":
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def parse_new_image_urls(raw: Optional[str]) -> List[str]:
    """
    Split the free-text "new images" box into URLs.

    Entries are separated by CRLF or commas. No URL validation happens here;
    rejecting malformed URLs is left to the repository.
    """
    if not raw:
        return []
    urls = (candidate.strip() for candidate in _NEW_IMAGE_SEPARATOR.split(raw))
    return [url for url in urls if url]


def parse_price(raw: Optional[str]) -> float:
    # Blank input means 0, anything unparsable becomes NaN and is sent as-is.
    if raw is None:
        logger.warning("Price missing from submission; sending NaN")
        return math.nan
    text = str(raw).strip()
    if not text:
        return 0.0
    if _HEX_PRICE.fullmatch(text):
        return float(int(text, 16))
    if _DECIMAL_PRICE.fullmatch(text):
        return float(text.replace("Infinity", "inf"))
    logger.warning("Unparsable price %r; sending NaN", raw)
    return math.nan
