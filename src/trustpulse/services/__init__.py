"""Services for TrustPulse."""

from .llm import LLMServiceFactory
from .classifier import classify_query
from .insights import InsightService, fetch_brand_insight, fetch_product_insights
from .chat import PulseChat

__all__ = [
    "LLMServiceFactory",
    "classify_query",
    "InsightService",
    "fetch_product_insights",
    "fetch_brand_insight",
    "PulseChat",
]
