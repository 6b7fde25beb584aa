"""Business directory: live listings, reputation lookups and card artwork."""

import logging
from pathlib import Path
from typing import List, Optional

import yaml

from ..core.config import settings
from ..core.constants import FileConstants
from ..core.models import BusinessListing, CommentBatch, ListingBatch, SocialComment
from .batch import fetch_batch
from .llm import LLMServiceFactory, to_data_url

logger = logging.getLogger(__name__)

ASSET_TYPES = ("logo", "card")


def _seed_path() -> Path:
    if settings.seed_businesses_path:
        return Path(settings.seed_businesses_path)
    return Path(__file__).resolve().parent.parent / "data" / FileConstants.SEED_BUSINESSES


def load_seed_businesses(path: Optional[Path] = None) -> List[BusinessListing]:
    """Load the seeded directory listings from YAML."""
    path = Path(path) if path else _seed_path()
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        return [BusinessListing.model_validate(item) for item in data.get("businesses", [])]
    except Exception as e:
        logger.warning(f"Failed to load seed businesses from {path}: {e}. Starting with an empty directory.")
        return []


def fetch_local_services(query: str, llm=None) -> List[BusinessListing]:
    llm = llm or LLMServiceFactory.create()
    prompt = f'Find local businesses or services for: "{query}".'
    return fetch_batch(llm, prompt, ListingBatch, "local_services")


def fetch_business_reputation(business_name: str, llm=None) -> List[SocialComment]:
    """Recent reviews and reputation data for one business."""
    llm = llm or LLMServiceFactory.create()
    prompt = f'Find recent reviews and reputation data for "{business_name}".'
    return fetch_batch(llm, prompt, CommentBatch, "business_reputation")


def generate_business_asset(prompt: str, asset_type: str = "card", llm=None) -> Optional[str]:
    """Generate a logo or card background; returns a PNG data URL or None."""
    if asset_type not in ASSET_TYPES:
        raise ValueError(f"asset_type must be one of {ASSET_TYPES}, got {asset_type!r}")
    llm = llm or LLMServiceFactory.create()
    try:
        image = llm.generate_image(f"Generate a professional {asset_type}: {prompt}")
    except Exception as e:
        logger.error(f"Business asset generation failed: {e}")
        return None
    return to_data_url(image)


def card_prompt(name: str, slogan: str, category: str, color: str) -> str:
    return (f'Premium digital business card background for "{name}" ({slogan}). '
            f"Style: minimalist luxury, Category: {category}, Palette: {color} and white. No text in the image.")
