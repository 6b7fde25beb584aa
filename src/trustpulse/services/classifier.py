"""Query classification: specific product versus broad brand."""

import logging
from textwrap import dedent

from ..core.constants import PromptConstants
from ..core.models import QueryKind
from .llm import LLMServiceFactory

logger = logging.getLogger(__name__)

CLASSIFIER_PROMPT = dedent("""
Classify query: "{query}".
If the user is asking about a specific model, version, flavor, scent, or product line
(e.g. "Dior Homme", "iPhone 15", "Woody Dior"), respond "product".
If the user is asking about the company/entity broadly (e.g. "Dior", "Apple", "Nike"), respond "brand".
Respond ONLY: "product" or "brand".
""").strip()


def classify_query(query: str, llm=None) -> QueryKind:
    """Decide whether ``query`` names a product or a brand.

    Fails open: any error or unusable reply classifies as product so the
    search can go on.
    """
    llm = llm or LLMServiceFactory.create()
    try:
        reply = llm.chat(
            system=None,
            user=CLASSIFIER_PROMPT.format(query=query),
            temperature=PromptConstants.CLASSIFIER_TEMPERATURE,
            max_tokens=PromptConstants.CLASSIFIER_MAX_TOKENS,
        )
    except Exception as e:
        logger.warning(f"Query classification failed, defaulting to product: {e}")
        return QueryKind.PRODUCT

    text = (reply or "").lower().strip()
    kind = QueryKind.BRAND if "brand" in text else QueryKind.PRODUCT
    logger.info(f"Classified '{query}' as {kind.value}")
    return kind
