"""TrustPulse AI assistant: a multi-turn chat with a fixed persona."""

import logging
from typing import List, Optional, Tuple

from ..core.constants import PromptConstants
from .llm import LLMServiceFactory

logger = logging.getLogger(__name__)


class PulseChat:
    """One conversation.

    The conversation history lives with the model provider; only the id of
    the last response is kept here to chain the next turn onto it.
    ``transcript`` is a display log, it is never sent back.
    """

    def __init__(self, llm=None, persona: str = PromptConstants.CHAT_PERSONA):
        self.llm = llm or LLMServiceFactory.create()
        self.persona = persona
        self.last_response_id: Optional[str] = None
        self.transcript: List[Tuple[str, str]] = [("bot", PromptConstants.CHAT_GREETING)]

    def send(self, message: str) -> str:
        """Send one user message and return the assistant reply."""
        if not message or not message.strip():
            raise ValueError("Message is empty")
        self.transcript.append(("user", message))
        try:
            reply, response_id = self.llm.respond(message, self.persona, previous_response_id=self.last_response_id)
            self.last_response_id = response_id
            reply = reply or PromptConstants.CHAT_EMPTY_REPLY
        except Exception as e:
            logger.error(f"Chat turn failed: {e}")
            reply = PromptConstants.CHAT_ERROR_REPLY
        self.transcript.append(("bot", reply))
        return reply
