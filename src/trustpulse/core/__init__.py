"""Core modules for TrustPulse."""

from .models import *
from .config import settings
from .results import FailureKind, FetchResult, FetchStatus
from .shaping import *
from .state import AppState, Store, reduce

__all__ = [
    "settings",
    "QueryKind",
    "ReviewSource",
    "SocialComment",
    "ProductInsight",
    "BrandInsight",
    "BusinessListing",
    "User",
    "FailureKind",
    "FetchResult",
    "FetchStatus",
    "AppState",
    "Store",
    "reduce",
    "bucket_by_style",
    "merge_relevant_reviews",
    "filter_listings",
    "score_to_width",
]
