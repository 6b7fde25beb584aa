"""Data models for TrustPulse.

Every record here arrives from the generative model as camelCase JSON (or is
built locally from a form). Attributes are snake_case; the camelCase alias is
what goes over the wire, so ``model_dump(by_alias=True)`` reproduces the
payload and ``model_json_schema(by_alias=True)`` is the structured-output
schema sent with each request.
"""

from enum import Enum
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class PulseModel(BaseModel):
    """Base model with camelCase wire aliases."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_wire(self) -> dict:
        """Serialize to the camelCase payload shape."""
        return self.model_dump(by_alias=True, mode="json", exclude_none=True)


class QueryKind(str, Enum):
    PRODUCT = "product"
    BRAND = "brand"


class ReviewSource(str, Enum):
    """Platform a review was collected from."""
    REDDIT = "reddit"
    GOOGLE = "google"
    TRUSTPULSE = "trustpulse"
    INTERNET = "internet"
    YOUTUBE = "youtube"
    WEBSITE = "website"
    YELP = "yelp"
    UBEREATS = "ubereats"
    TRIPADVISOR = "tripadvisor"
    AMAZON = "amazon"
    EBAY = "ebay"
    PINTEREST = "pinterest"


# ---- Reviews ----

class CategorizedPulse(PulseModel):
    """Four-pillar breakdown, each 0-100."""
    quality: float = 0.0
    durability: float = 0.0
    value: float = 0.0
    utility: float = 0.0


class Keyword(PulseModel):
    word: str = ""
    sentiment: Literal["positive", "negative", "neutral"] = "neutral"

    @field_validator("sentiment", mode="before")
    @classmethod
    def normalize_sentiment(cls, v):
        label = str(v or "").strip().lower()
        return label if label in ("positive", "negative") else "neutral"


class SocialComment(PulseModel):
    """One user- or AI-sourced review."""
    id: Optional[str] = None
    user: str = ""
    text: str = ""
    score: float = 0.0  # 1-5 stars
    detailed_rating: Optional[CategorizedPulse] = None
    date: str = ""
    source: ReviewSource = ReviewSource.INTERNET
    source_url: Optional[str] = None
    is_verified: bool = False
    is_buyer: bool = False
    is_collaboration: bool = False
    video_url: Optional[str] = None
    keywords: List[Keyword] = Field(default_factory=list)
    replies: List["SocialComment"] = Field(default_factory=list)

    @field_validator("source", mode="before")
    @classmethod
    def normalize_source(cls, v):
        """Platform labels arrive free-form ("Amazon", "TikTok"); unknown ones count as internet."""
        if isinstance(v, ReviewSource):
            return v
        label = str(v or "").strip().lower()
        try:
            return ReviewSource(label)
        except ValueError:
            return ReviewSource.INTERNET


# ---- Product insight parts ----

class PricePoint(PulseModel):
    store: str = ""
    price: str = ""
    link: str = ""
    availability: bool = False
    previous_price: Optional[str] = None
    last_updated: Optional[str] = None


class SentimentHistoryPoint(PulseModel):
    date: str = ""
    positive: float = 0.0
    neutral: float = 0.0
    negative: float = 0.0
    net_score: Optional[float] = None


class SentimentStats(PulseModel):
    """Aggregate sentiment, percentages plus average star rating."""
    positive: float = 0.0
    neutral: float = 0.0
    negative: float = 0.0
    average_rating: float = 0.0
    total_reviews_analyzed: int = 0
    history: List[SentimentHistoryPoint] = Field(default_factory=list)


class Macro(PulseModel):
    label: str = ""
    value: str = ""


class NutritionalFacts(PulseModel):
    calories: Optional[str] = None
    macros: List[Macro] = Field(default_factory=list)
    health_benefits: List[str] = Field(default_factory=list)
    health_warnings: List[str] = Field(default_factory=list)


class Recipe(PulseModel):
    title: str = ""
    servings: Optional[str] = None
    ingredients: List[str] = Field(default_factory=list)
    steps: List[str] = Field(default_factory=list)


class ProductSpec(PulseModel):
    label: str = ""
    value: str = ""
    category: Optional[str] = None


class SimilarProduct(PulseModel):
    name: str = ""
    image_url: str = ""
    price_estimate: Optional[str] = None
    details: Optional[str] = None
    # Luxury, Comfort, Aesthetics or Casual; kept as text so an unexpected
    # label still validates and is bucketed as Casual.
    style_category: str = "Casual"


class BudgetAlternative(PulseModel):
    store: str = ""
    name: str = ""
    price: str = ""
    link: str = ""
    image_url: Optional[str] = None


class ProductTier(PulseModel):
    tier: str = ""  # High-End, Mid-Range or Budget
    name: str = ""
    price: str = ""
    reason: str = ""
    link: str = ""
    store: str = ""
    image: str = ""


class InfluencerReview(PulseModel):
    name: str = ""
    avatar: str = ""
    platform: str = ""
    content: str = ""
    trust_score: float = 0.0
    video_url: Optional[str] = None


class PulseEvent(PulseModel):
    id: str = ""
    title: str = ""
    date: str = ""
    platform: str = ""  # YouTube, Zoom, Twitch, Official, Recorded
    link: str = ""
    description: str = ""
    status: str = ""  # live, upcoming, on-demand
    recommendation_reason: str = ""


class ProductInsight(PulseModel):
    """Canonical report for a specific product or product line.

    ``price_comparison`` keeps the order the model returned; the first entry
    is presented as best value without any sorting.
    """
    name: str = ""
    category: str = ""
    is_consumable: bool = False
    description: str = ""
    price_comparison: List[PricePoint] = Field(default_factory=list)
    product_tiers: List[ProductTier] = Field(default_factory=list)
    budget_alternatives: List[BudgetAlternative] = Field(default_factory=list)
    sentiment: SentimentStats = Field(default_factory=SentimentStats)
    categorized_pulse: Optional[CategorizedPulse] = None
    nutritional_facts: Optional[NutritionalFacts] = None
    recipes: List[Recipe] = Field(default_factory=list)
    pairings: List[str] = Field(default_factory=list)
    reddit_comments: List[SocialComment] = Field(default_factory=list)
    google_reviews: List[SocialComment] = Field(default_factory=list)
    top_relevant_reviews: List[SocialComment] = Field(default_factory=list)
    top_positive_reviews: List[SocialComment] = Field(default_factory=list)
    top_negative_reviews: List[SocialComment] = Field(default_factory=list)
    influencer_reviews: List[InfluencerReview] = Field(default_factory=list)
    similar_products: List[SimilarProduct] = Field(default_factory=list)
    specifications: List[ProductSpec] = Field(default_factory=list)
    events: List[PulseEvent] = Field(default_factory=list)
    video_reviews: List[str] = Field(default_factory=list)
    brand_score: float = 0.0  # 0-100
    total_verified_reviews: Optional[int] = None
    last_price_refresh: Optional[str] = None


# ---- Brand insight ----

class CatalogItem(PulseModel):
    name: str = ""
    category: str = ""
    price_range: str = ""
    image_url: str = ""
    trust_pulse: float = 0.0


class BrandService(PulseModel):
    name: str = ""
    description: str = ""
    price_range: str = ""


class InfluencerQuote(PulseModel):
    name: str = ""
    handle: str = ""
    quote: str = ""
    score: float = 0.0


class BrandInsight(PulseModel):
    """Canonical report for a brand entity."""
    brand_name: str = ""
    logo_url: Optional[str] = None
    industry: str = ""
    description: str = ""
    email: Optional[str] = None
    mission: Optional[str] = None
    market_trust_score: float = 0.0
    product_catalog: List[CatalogItem] = Field(default_factory=list)
    services: List[BrandService] = Field(default_factory=list)
    events: List[PulseEvent] = Field(default_factory=list)
    influencer_pulse: List[InfluencerQuote] = Field(default_factory=list)
    web_mentions: List[SocialComment] = Field(default_factory=list)


# ---- Directory, people and collaboration ----

class BusinessListing(PulseModel):
    id: str = ""
    business_name: str = ""
    category: str = ""
    description: str = ""
    slogan: Optional[str] = None
    location: str = ""
    address: Optional[str] = None
    website: Optional[str] = None
    phone: Optional[str] = None
    contact: str = ""
    rating: float = 0.0
    is_verified: bool = False
    image: str = ""
    style: Optional[str] = None
    color: Optional[str] = None
    verified_reviews: List[SocialComment] = Field(default_factory=list)


class User(PulseModel):
    """Ephemeral session identity; the flags gate UI affordances."""
    id: str
    name: str
    email: str = ""
    provider: Literal["google", "facebook", "guest"] = "guest"
    is_verified: bool = False
    is_blogger: bool = False
    is_influencer: bool = False
    influence_score: Optional[float] = None
    is_creator: bool = False


class BlogPost(PulseModel):
    id: str = ""
    title: str = ""
    author: str = ""
    content: str = ""
    category: str = ""
    date: str = ""
    is_verified: bool = False
    read_time: str = ""
    likes: int = 0
    video_url: Optional[str] = None


class InfluencerProfile(PulseModel):
    id: str = ""
    name: str = ""
    handle: str = ""
    email: Optional[str] = None
    avatar: str = ""
    category: str = ""
    trust_score: float = 0.0
    total_reviews: int = 0
    collaborations: int = 0
    followers: int = 0
    is_verified: bool = False
    alignment_score: Optional[float] = None
    top_reviews: List[SocialComment] = Field(default_factory=list)
    recent_blogs: List[BlogPost] = Field(default_factory=list)


class CollabMatch(PulseModel):
    id: str = ""
    name: str = ""
    category: str = ""
    reach: str = ""
    description: str = ""
    matched_pulse: float = 0.0
    email: str = ""


# ---- Array envelopes (structured output must be a top-level object) ----

class ListingBatch(PulseModel):
    items: List[BusinessListing] = Field(default_factory=list)


class CommentBatch(PulseModel):
    items: List[SocialComment] = Field(default_factory=list)


class InfluencerBatch(PulseModel):
    items: List[InfluencerProfile] = Field(default_factory=list)


class CollabBatch(PulseModel):
    items: List[CollabMatch] = Field(default_factory=list)
