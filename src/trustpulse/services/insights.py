"""Insight fetcher: structured product and brand reports from the model."""

import logging
from textwrap import dedent
from typing import Optional, Type, TypeVar

from pydantic import BaseModel

from ..core.constants import PromptConstants
from ..core.models import BrandInsight, ProductInsight, QueryKind
from ..core.results import FailureKind, FetchResult
from .llm import LLMServiceFactory

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)

PRODUCT_PROMPT = dedent("""
ACT AS A HIGH-SPEED DATA EXTRACTOR.
TARGET: "{query}"

CORE TASK:
1. REVIEWS: Extract as many unique, organic user reviews as possible (MAX {max_reviews} per category) for:
   'topRelevantReviews', 'topPositiveReviews', and 'topNegativeReviews'.
2. MIXED SOURCES: You MUST find and include reviews from Amazon, eBay, Pinterest, Reddit, and Google.
   Map the 'source' field to a lowercase platform name (amazon, ebay, pinterest, reddit, google, youtube).
3. PRICING: Find current market prices from at least {min_retailers} distinct retailers, best value first.
4. CATEGORIZED PULSE: Score Quality, Durability, Value, and Utility from 0-100 based on community consensus.
5. ATTRIBUTES: If this is a fragrance/scent, include 'notes' in specifications. If food, include nutrition,
   recipes and pairings and set isConsumable.
6. SIMILAR PRODUCTS: Give each a styleCategory of Luxury, Comfort, Aesthetics or Casual.
7. brandScore is a 0-100 Pulse Score.
""").strip()

BRAND_PROMPT = dedent("""
Quick Brand Pulse Audit for: "{query}".
Report the brand name, industry, description, mission, a 0-100 marketTrustScore,
a product catalog with a 0-100 trustPulse per item, services, influencer opinions
with a per-entry trust score, and recent web mentions.
""").strip()


def _schema(model: Type[BaseModel]) -> dict:
    return model.model_json_schema(by_alias=True)


class InsightService:
    """Fetches one insight per call and reports the outcome as a FetchResult.

    Nothing raises out of this class: transport errors, unparseable replies
    and schema mismatches all come back as failures with a reason.
    """

    def __init__(self, llm=None):
        self.llm = llm or LLMServiceFactory.create()

    def fetch(self, kind: QueryKind, query: str) -> FetchResult:
        if kind == QueryKind.BRAND:
            return self.fetch_brand(query)
        return self.fetch_product(query)

    def fetch_product(self, query: str) -> FetchResult[ProductInsight]:
        prompt = PRODUCT_PROMPT.format(query=query, max_reviews=PromptConstants.MAX_REVIEWS_PER_TAB,
                                       min_retailers=PromptConstants.MIN_RETAILERS)
        return self._fetch(prompt, ProductInsight, "product_insight", identity="name")

    def fetch_brand(self, query: str) -> FetchResult[BrandInsight]:
        return self._fetch(BRAND_PROMPT.format(query=query), BrandInsight, "brand_insight", identity="brand_name")

    def _fetch(self, prompt: str, model: Type[M], name: str, identity: str) -> FetchResult[M]:
        try:
            payload = self.llm.generate_json(prompt, _schema(model), name, grounded=True)
            if payload is None:
                return FetchResult.empty("model returned no payload")
            if not isinstance(payload, dict):
                return FetchResult.fail(FailureKind.MALFORMED, f"expected an object, got {type(payload).__name__}")
            record = model.model_validate(payload)
        except Exception as e:
            result = FetchResult.from_exception(e)
            logger.error(f"Error fetching {name} ({result.failure.value}): {e}")
            return result

        # A record without its identity field is "no result", not an error
        if not str(getattr(record, identity) or "").strip():
            logger.info(f"{name} has no {identity}; treating as empty")
            return FetchResult.empty(f"missing {identity}")
        return FetchResult.success(record)


def fetch_product_insights(query: str, llm=None) -> Optional[ProductInsight]:
    """Product insight or None when nothing usable came back."""
    return InsightService(llm).fetch_product(query).unwrap_or_none()


def fetch_brand_insight(query: str, llm=None) -> Optional[BrandInsight]:
    """Brand insight or None when nothing usable came back."""
    return InsightService(llm).fetch_brand(query).unwrap_or_none()
