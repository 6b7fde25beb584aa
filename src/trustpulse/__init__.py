"""TrustPulse - AI-sourced product and brand trust insights."""

__version__ = "1.0.0"
__author__ = "TrustPulse Team"

from .core.models import *
from .core.config import settings
from .services.llm import LLMServiceFactory
from .app import TrustPulseApp

__all__ = [
    "settings",
    "LLMServiceFactory",
    "TrustPulseApp",
]
