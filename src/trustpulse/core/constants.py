"""Constants and configuration values for TrustPulse."""


# Prompt Constants
class PromptConstants:
    """Constants for LLM prompts and templates."""

    # Prompt Versions (for cache invalidation)
    PROMPT_VERSION = "v1.3"

    CLASSIFIER_MAX_TOKENS = 5
    CLASSIFIER_TEMPERATURE = 0.0

    INSIGHT_TEMPERATURE = 0.2
    MAX_REVIEWS_PER_TAB = 10  # reviews per relevant/positive/negative list
    MIN_RETAILERS = 3  # distinct retailers for price comparison

    CHAT_PERSONA = "You are TrustPulse AI, a world-class senior market and nutrition analyst."
    CHAT_GREETING = "Hello! I am TrustPulse AI. How can I help you today?"
    CHAT_EMPTY_REPLY = "I'm sorry, I couldn't process that."
    CHAT_ERROR_REPLY = "Error connecting to Pulse AI."

    MEASURE_INCONCLUSIVE = "Analysis inconclusive."
    MEASURE_FAILED = "Scan failed."

    INFLUENCER_SEARCH_LIMIT = 5


# Cache Constants
class CacheConstants:
    """Constants for caching behavior."""

    CACHE_KEY_LENGTH = 8  # length of cache key for logging


# Error Handling Constants
class ErrorConstants:
    """Constants for error handling and retries."""

    MAX_RETRY_WAIT = 20  # ceiling for exponential backoff in seconds
    REASON_MAX_LENGTH = 200  # characters of an exception kept as failure reason


# File and Path Constants
class FileConstants:
    """Constants for file operations."""

    SEED_BUSINESSES = "seed_businesses.yaml"  # bundled under trustpulse/data
    LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    EXPORT_VERSION = "1.0.0"


# Presentation Constants
class DisplayConstants:
    """Constants for the presentation layer."""

    STYLE_BUCKETS = ("Luxury", "Comfort", "Aesthetics", "Casual")
    DEFAULT_STYLE_BUCKET = "Casual"

    ALL_CATEGORIES = "All"
    DIRECTORY_CATEGORIES = ("All", "Services", "Tech", "Food & Beverage", "Health", "Legal", "Finance")

    REVIEW_TABS = ("relevant", "high", "low")

    PULSE_PILLARS = (
        ("quality", "Quality", "Materials & Finish"),
        ("durability", "Durability", "Long-term Pulse"),
        ("value", "Value", "Price/Performance"),
        ("utility", "Utility", "Core Functional"),
    )

    PLACEHOLDER_IMAGE = "https://picsum.photos/seed/{seed}/800/450"
    LOCAL_REVIEW_DATE = "Just now"
    DEFAULT_LOCATION = "Global"
    CREATOR_INFLUENCE_SCORE = 88


# Application Views
class ViewConstants:
    """Top-level views of the application."""

    MARKETPLACE = "marketplace"
    BUSINESS = "business"
    INFLUENCERS = "influencers"
    CREATOR_HUB = "creator-hub"
    COLLAB_HUB = "collab-hub"

    ALL = (MARKETPLACE, BUSINESS, INFLUENCERS, CREATOR_HUB, COLLAB_HUB)
