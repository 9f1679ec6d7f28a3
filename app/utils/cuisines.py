"""
Cuisine Mapper Utility
Maps user-facing cuisine labels to Google Places (New) primary type tokens.
"""
from types import MappingProxyType
from typing import Iterable, List, Mapping

GENERIC_RESTAURANT_TYPE = "restaurant"

# One provider type per label. Labels the provider has no dedicated type for
# (e.g. "Cajun", "Polish") are intentionally absent and fall back to the
# generic type when nothing else matches.
CUISINE_TYPE_MAP: Mapping[str, str] = MappingProxyType({
    "american": "american_restaurant",
    "asian fusion": "asian_restaurant",
    "barbecue": "barbecue_restaurant",
    "brazilian": "brazilian_restaurant",
    "breakfast & brunch": "breakfast_restaurant",
    "chinese": "chinese_restaurant",
    "desserts": "dessert_restaurant",
    "french": "french_restaurant",
    "greek": "greek_restaurant",
    "indian": "indian_restaurant",
    "indonesian": "indonesian_restaurant",
    "italian": "italian_restaurant",
    "japanese": "japanese_restaurant",
    "korean": "korean_restaurant",
    "lebanese": "lebanese_restaurant",
    "mediterranean": "mediterranean_restaurant",
    "mexican": "mexican_restaurant",
    "middle eastern": "middle_eastern_restaurant",
    "pizza": "pizza_restaurant",
    "ramen": "ramen_restaurant",
    "seafood": "seafood_restaurant",
    "spanish": "spanish_restaurant",
    "steakhouse": "steak_house",
    "sushi": "sushi_restaurant",
    "thai": "thai_restaurant",
    "turkish": "turkish_restaurant",
    "vegan": "vegan_restaurant",
    "vegetarian": "vegetarian_restaurant",
    "vietnamese": "vietnamese_restaurant",
    "west african": "african_restaurant",
})


def map_cuisines(labels: Iterable[str]) -> List[str]:
    """
    Map cuisine labels to provider type tokens.

    Matching is case-insensitive. Unknown labels are dropped; if nothing
    maps, the generic "restaurant" type is returned so the search is never
    sent without a type restriction. The provider ORs multiple types.

    Args:
        labels: Cuisine labels as shown in the UI (e.g. "Italian")

    Returns:
        Non-empty list of distinct type tokens, in first-seen order
    """
    types: List[str] = []
    for label in labels or ():
        token = CUISINE_TYPE_MAP.get(label.strip().lower())
        if token and token not in types:
            types.append(token)

    return types or [GENERIC_RESTAURANT_TYPE]
