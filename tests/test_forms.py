"""Tests for local form handling."""

import pytest

from trustpulse.core.forms import (
    AuthRequiredError, FormValidationError, build_business_listing, build_review, make_user, verify_creator,
)
from trustpulse.core.models import CategorizedPulse, ReviewSource, User


class TestBuildReview:

    def setup_method(self):
        self.user = make_user("Sam")

    def test_defaults(self):
        review = build_review(self.user, "Solid phone.", rating=4)

        assert review.user == "Sam"
        assert review.score == 4
        assert review.source is ReviewSource.TRUSTPULSE
        assert review.is_verified and review.is_buyer
        assert review.date == "Just now"
        assert review.detailed_rating == CategorizedPulse(quality=80, durability=80, value=80, utility=80)
        assert not review.is_collaboration

    def test_no_user(self):
        with pytest.raises(AuthRequiredError):
            build_review(None, "text")

    def test_unverified_user(self):
        with pytest.raises(AuthRequiredError):
            build_review(User(id="1", name="Anon"), "text")

    @pytest.mark.parametrize("text", ["", "   "])
    def test_blank_text(self, text):
        with pytest.raises(FormValidationError):
            build_review(self.user, text)

    @pytest.mark.parametrize("rating", [0, 6])
    def test_rating_out_of_range(self, rating):
        with pytest.raises(FormValidationError):
            build_review(self.user, "ok", rating=rating)

    def test_target(self):
        assert build_review(self.user, "ok", target="google").source is ReviewSource.GOOGLE
        with pytest.raises(FormValidationError):
            build_review(self.user, "ok", target="myspace")

    def test_collaboration_needs_creator(self):
        assert not build_review(self.user, "ok", collaboration=True).is_collaboration

        influencer = self.user.model_copy(update={"is_influencer": True})
        assert build_review(influencer, "ok", collaboration=True).is_collaboration


class TestMakeUser:

    def test_guest_is_verified(self):
        user = make_user("  Sam  ", "sam@example.com")
        assert user.name == "Sam"
        assert user.is_verified
        assert user.provider == "guest"

    def test_name_required(self):
        with pytest.raises(FormValidationError):
            make_user("")


class TestBuildBusinessListing:

    def test_full_listing(self):
        listing = build_business_listing("Pulse Cafe", slogan="Fresh daily", category="Food & Beverage",
                                         address="12 Main St, Portland, OR", website="https://pulse.cafe")

        assert listing.location == "OR"
        assert listing.description == "Fresh daily"
        assert listing.contact == "https://pulse.cafe"
        assert listing.rating == 5.0
        assert listing.is_verified
        assert listing.id

    def test_defaults(self):
        listing = build_business_listing("Quiet Law", category="Legal", phone="555-0100")

        assert listing.location == "Global"
        assert listing.description == "Verified Legal professional on TrustPulse."
        assert listing.contact == "555-0100"
        assert "Quiet Law" in listing.image

    def test_name_required(self):
        with pytest.raises(FormValidationError):
            build_business_listing("  ")


class TestVerifyCreator:

    def setup_method(self):
        self.user = make_user("Sam")

    def test_marks_blogger_and_influencer(self):
        creator = verify_creator(self.user, "@sam", "TikTok")

        assert creator.is_blogger and creator.is_influencer
        assert creator.influence_score == 88
        assert creator.id == self.user.id
        assert not self.user.is_influencer

    def test_verified_creator_can_post_collaboration(self):
        creator = verify_creator(self.user, "@sam")
        assert build_review(creator, "Sponsored unboxing", collaboration=True).is_collaboration

    def test_no_user(self):
        with pytest.raises(AuthRequiredError):
            verify_creator(None, "@sam")

    @pytest.mark.parametrize("handle", ["", "   "])
    def test_blank_handle(self, handle):
        with pytest.raises(FormValidationError):
            verify_creator(self.user, handle)

    def test_unknown_platform(self):
        with pytest.raises(FormValidationError):
            verify_creator(self.user, "@sam", "MySpace")
