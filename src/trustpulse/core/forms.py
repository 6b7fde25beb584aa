"""Local form handling: review submission, directory cards and mock login.

Validation happens here, synchronously, before anything touches the network.
"""

import uuid
from typing import List, Optional

from .constants import DisplayConstants
from .models import BusinessListing, CategorizedPulse, ReviewSource, SocialComment, User

REVIEW_TARGETS = {
    "trustpulse": ReviewSource.TRUSTPULSE,
    "google": ReviewSource.GOOGLE,
    "website": ReviewSource.WEBSITE,
}

CREATOR_PLATFORMS = ("YouTube", "Instagram", "TikTok", "Blog")


class FormValidationError(ValueError):
    """A local form is missing required input."""


class AuthRequiredError(PermissionError):
    """The action needs a logged-in, verified user."""


def _new_id() -> str:
    return uuid.uuid4().hex[:9]


def make_user(name: str, email: str = "", provider: str = "guest") -> User:
    """Mock login; every signed-in user counts as verified."""
    if not name or not name.strip():
        raise FormValidationError("Name is required to sign in")
    return User(id=_new_id(), name=name.strip(), email=email, provider=provider, is_verified=True)


def build_review(user: Optional[User], text: str, rating: int = 5, target: str = "trustpulse",
                 detailed_rating: Optional[CategorizedPulse] = None, collaboration: bool = False) -> SocialComment:
    """Build a locally authored review.

    Raises AuthRequiredError when nobody is signed in or the user is not
    verified, and FormValidationError for blank text, a rating outside 1-5
    or an unknown target.
    """
    if user is None or not user.is_verified:
        raise AuthRequiredError("Only verified users can post reviews")
    if not text or not text.strip():
        raise FormValidationError("Review text is required")
    if not 1 <= rating <= 5:
        raise FormValidationError(f"Rating must be between 1 and 5, got {rating}")
    if target not in REVIEW_TARGETS:
        raise FormValidationError(f"Unknown review target: {target}")

    is_blogger = user.is_blogger or user.is_influencer
    return SocialComment(
        user=user.name,
        text=text,
        score=rating,
        detailed_rating=detailed_rating or CategorizedPulse(quality=80, durability=80, value=80, utility=80),
        date=DisplayConstants.LOCAL_REVIEW_DATE,
        source=REVIEW_TARGETS[target],
        is_verified=True,
        is_buyer=True,
        is_collaboration=bool(collaboration and is_blogger),
    )


def build_business_listing(name: str, slogan: str = "", category: str = "Services", address: str = "",
                           website: str = "", phone: str = "", image: Optional[str] = None,
                           verified_reviews: Optional[List[SocialComment]] = None,
                           color: Optional[str] = None) -> BusinessListing:
    """Build a directory card from the creative-studio wizard."""
    if not name or not name.strip():
        raise FormValidationError("Business name is required")

    location = address.split(",")[-1].strip() if address else ""
    return BusinessListing(
        id=_new_id(),
        business_name=name,
        slogan=slogan,
        category=category,
        description=slogan or f"Verified {category} professional on TrustPulse.",
        location=location or DisplayConstants.DEFAULT_LOCATION,
        address=address,
        website=website,
        phone=phone,
        contact=website or phone,
        rating=5.0,
        is_verified=True,
        image=image or DisplayConstants.PLACEHOLDER_IMAGE.format(seed=name),
        color=color,
        verified_reviews=list(verified_reviews or []),
    )


def verify_creator(user: Optional[User], handle: str, platform: str = "YouTube") -> User:
    """Mark a signed-in user as a verified blogger and influencer.

    Raises AuthRequiredError when nobody is signed in and FormValidationError
    for a blank handle or an unknown platform.
    """
    if user is None:
        raise AuthRequiredError("Sign in to verify a creator profile")
    if not handle or not handle.strip():
        raise FormValidationError("Social handle is required")
    if platform not in CREATOR_PLATFORMS:
        raise FormValidationError(f"Unknown platform: {platform}")
    return user.model_copy(update={
        "is_blogger": True,
        "is_influencer": True,
        "influence_score": DisplayConstants.CREATOR_INFLUENCE_SCORE,
    })
