"""Conversion between Google price level tokens and a 0-4 integer scale."""
import logging
from typing import Optional

logger = logging.getLogger(__name__)

PRICE_LEVEL_PREFIX = "PRICE_LEVEL_"

# Places API (New) spells levels as words; older payloads used digits.
_WORD_LEVELS = {
    "FREE": 0,
    "UNSPECIFIED": 0,
    "INEXPENSIVE": 1,
    "MODERATE": 2,
    "EXPENSIVE": 3,
    "VERY_EXPENSIVE": 4,
}
_LEVEL_WORDS = {0: "FREE", 1: "INEXPENSIVE", 2: "MODERATE", 3: "EXPENSIVE", 4: "VERY_EXPENSIVE"}


def decode_price_level(token: Optional[str]) -> int:
    """Decode a provider price token to 0-4. Missing or unknown tokens are 0."""
    if not token:
        return 0

    suffix = token[len(PRICE_LEVEL_PREFIX):] if token.startswith(PRICE_LEVEL_PREFIX) else token

    if suffix.isdigit():
        return int(suffix)
    if suffix in _WORD_LEVELS:
        return _WORD_LEVELS[suffix]

    logger.warning(f"Unrecognised price level token: {token!r}")
    return 0


def encode_price_level(level: int) -> str:
    """Encode a 0-4 price level as a provider token."""
    if level not in _LEVEL_WORDS:
        raise ValueError(f"price level must be between 0 and 4, got {level}")
    return f"{PRICE_LEVEL_PREFIX}{_LEVEL_WORDS[level]}"
