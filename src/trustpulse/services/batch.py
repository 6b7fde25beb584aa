"""Shared handling for structured requests that return a list of records."""

import logging
from typing import List, Type

from ..core.models import PulseModel

logger = logging.getLogger(__name__)


def fetch_batch(llm, prompt: str, batch_model: Type[PulseModel], name: str, grounded: bool = True) -> List:
    """Request ``batch_model`` (an ``items`` envelope) and return its items.

    A bare JSON array is accepted as the item list. Any failure yields [].
    """
    try:
        payload = llm.generate_json(prompt, batch_model.model_json_schema(by_alias=True), name, grounded=grounded)
        if payload is None:
            return []
        if isinstance(payload, list):
            payload = {"items": payload}
        return list(batch_model.model_validate(payload).items)
    except Exception as e:
        logger.error(f"{name} request failed: {e}")
        return []
