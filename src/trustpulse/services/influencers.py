"""Influencer discovery and collaboration matchmaking."""

import logging
from typing import List

from ..core.constants import PromptConstants
from ..core.models import CollabBatch, CollabMatch, InfluencerBatch, InfluencerProfile
from .batch import fetch_batch
from .llm import LLMServiceFactory

logger = logging.getLogger(__name__)

COLLAB_TARGETS = ("influencers", "brands")


def search_influencers(query: str, llm=None) -> List[InfluencerProfile]:
    """Top influencers or food bloggers for a category."""
    llm = llm or LLMServiceFactory.create()
    limit = PromptConstants.INFLUENCER_SEARCH_LIMIT
    prompt = f'Identify top {limit} influencers or food bloggers for category: "{query or "experts"}".'
    return fetch_batch(llm, prompt, InfluencerBatch, "influencer_search")[:limit]


def find_collab_matches(query: str, target_type: str = "influencers", llm=None) -> List[CollabMatch]:
    if target_type not in COLLAB_TARGETS:
        raise ValueError(f"target_type must be one of {COLLAB_TARGETS}, got {target_type!r}")
    llm = llm or LLMServiceFactory.create()
    prompt = f'Find potential collaboration matches for: "{query}". Target Type: {target_type}.'
    return fetch_batch(llm, prompt, CollabBatch, "collab_matches")
