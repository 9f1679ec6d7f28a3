"""Pure helpers for the discovery pipeline."""

from app.utils.cuisines import map_cuisines
from app.utils.filters import accept, apply_result_filters
from app.utils.price_levels import decode_price_level, encode_price_level
from app.utils.selector import RandomSelector

__all__ = [
    "map_cuisines",
    "accept",
    "apply_result_filters",
    "decode_price_level",
    "encode_price_level",
    "RandomSelector",
]
