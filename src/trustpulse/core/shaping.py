"""Pure transformations applied to fetched records before display.

Nothing here keeps state: calling a function twice on the same input gives
the same output, so views can be recomputed on every render.
"""

from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from .constants import DisplayConstants
from .models import BusinessListing, CategorizedPulse, PricePoint, ProductInsight, SimilarProduct, SocialComment

STYLE_BUCKETS = DisplayConstants.STYLE_BUCKETS
DIRECTORY_CATEGORIES = DisplayConstants.DIRECTORY_CATEGORIES


def bucket_by_style(similar: Optional[Iterable[SimilarProduct]]) -> Dict[str, List[SimilarProduct]]:
    """Group similar products into the four style buckets.

    All four buckets are always present, in display order. An item whose
    ``style_category`` is not one of the named buckets goes to Casual.
    """
    groups: Dict[str, List[SimilarProduct]] = {name: [] for name in STYLE_BUCKETS}
    for item in similar or []:
        key = item.style_category if item.style_category in groups else DisplayConstants.DEFAULT_STYLE_BUCKET
        groups[key].append(item)
    return groups


def merge_relevant_reviews(local: Sequence[SocialComment], fetched: Sequence[SocialComment]) -> List[SocialComment]:
    """Locally authored reviews (newest first) ahead of fetched ones."""
    return list(local) + list(fetched)


def reviews_for_tab(tab: str, insight: ProductInsight, local_reviews: Sequence[SocialComment] = ()) -> List[SocialComment]:
    """Reviews shown under one tab of the review panel.

    Only the ``relevant`` tab includes local submissions; ``high`` and
    ``low`` show fetched positive and negative reviews as-is.
    """
    if tab == "relevant":
        return merge_relevant_reviews(local_reviews, insight.top_relevant_reviews)
    if tab == "high":
        return list(insight.top_positive_reviews)
    if tab == "low":
        return list(insight.top_negative_reviews)
    raise ValueError(f"Unknown review tab: {tab!r}")


def listing_matches(listing: BusinessListing, term: str = "", category: str = DisplayConstants.ALL_CATEGORIES) -> bool:
    """Search term on name or description AND category filter."""
    needle = (term or "").lower()
    matches_search = needle in listing.business_name.lower() or needle in listing.description.lower()
    matches_category = category == DisplayConstants.ALL_CATEGORIES or listing.category == category
    return matches_search and matches_category


def filter_listings(listings: Iterable[BusinessListing], term: str = "",
                    category: str = DisplayConstants.ALL_CATEGORIES) -> List[BusinessListing]:
    return [biz for biz in listings if listing_matches(biz, term, category)]


def score_to_width(score: float, track: float = 100.0) -> float:
    # Linear in the 0-100 domain; out-of-range scores pass through unchanged
    return score * track / 100.0


def pulse_pillars(pulse: CategorizedPulse) -> List[Dict[str, object]]:
    """Rows for the four-pillar panel: label, description, score and width."""
    rows = []
    for field, label, description in DisplayConstants.PULSE_PILLARS:
        score = getattr(pulse, field)
        rows.append({
            "key": field,
            "label": label,
            "description": description,
            "score": score,
            "width": score_to_width(score),
        })
    return rows


def label_price_points(prices: Optional[Sequence[PricePoint]]) -> List[Tuple[PricePoint, bool]]:
    """Pair each price with a best-value flag.

    The flag is positional: the first entry is best value in the order the
    model returned, no sort is applied.
    """
    return [(price, index == 0) for index, price in enumerate(prices or [])]
