"""Acceptance rules applied to nearby-search candidates."""
from typing import Iterable, List

from app.models.places import PlaceCandidate, SearchFilters
from app.utils.price_levels import decode_price_level

ANY_RATING = 0
ANY_PRICE_LEVEL = 5
# Ratings backed by fewer reviews than this are not trusted
MIN_REVIEW_COUNT = 10


def accept(candidate: PlaceCandidate, filters: SearchFilters) -> bool:
    """
    Decide whether a candidate satisfies the rating and price filters.

    Cuisine is not checked here; the nearby query already restricts types.
    """
    if filters.min_rating > ANY_RATING:
        if candidate.rating is None or candidate.user_rating_count is None:
            return False
        if candidate.rating < filters.min_rating:
            return False
        if candidate.user_rating_count < MIN_REVIEW_COUNT:
            return False

    if filters.max_price_level < ANY_PRICE_LEVEL:
        price = decode_price_level(candidate.price_level_token)
        # Unknown price never excludes
        if price > 0 and price > filters.max_price_level:
            return False

    return True


def apply_result_filters(
    candidates: Iterable[PlaceCandidate], filters: SearchFilters
) -> List[PlaceCandidate]:
    """Keep candidates accepted by `accept`, preserving provider order."""
    return [c for c in candidates if accept(c, filters)]
