"""Tests for the application controller."""

from unittest.mock import Mock

import pytest

from trustpulse.app import TrustPulseApp
from trustpulse.core.constants import ViewConstants
from trustpulse.core.forms import FormValidationError, make_user
from trustpulse.core.results import FailureKind, FetchStatus
from trustpulse.core.state import Store


class DeferredExecutor:
    """Collects submitted work so a test can run it in any order."""

    def __init__(self):
        self.jobs = []

    def submit(self, fn, *args):
        self.jobs.append((fn, args))
        return Mock()

    def shutdown(self, wait=True):
        pass


class TestSearch:

    def setup_method(self):
        self.llm = Mock()
        self.app = TrustPulseApp(llm=self.llm, store=Store())

    def test_product_search(self, product_payload):
        self.llm.chat.return_value = "product"
        self.llm.generate_json.return_value = product_payload

        result = self.app.search("iPhone 15")

        assert result.ok
        assert self.app.state.product_insight.name == "iPhone 15"
        assert self.app.state.brand_insight is None
        assert not self.app.state.is_loading

    def test_brand_search(self, brand_payload):
        self.llm.chat.return_value = "brand"
        self.llm.generate_json.return_value = brand_payload

        self.app.search("Nike")

        assert self.app.state.brand_insight.brand_name == "Nike"
        assert self.app.state.product_insight is None

    def test_classifier_failure_still_searches_as_product(self, product_payload):
        self.llm.chat.side_effect = ConnectionError("down")
        self.llm.generate_json.return_value = product_payload

        self.app.search("iPhone 15")

        assert self.app.state.product_insight is not None

    def test_failed_fetch_leaves_idle(self):
        self.llm.chat.return_value = "product"
        self.llm.generate_json.side_effect = ConnectionError("down")

        result = self.app.search("iPhone 15")

        assert result.failure is FailureKind.NETWORK
        assert self.app.state.is_idle
        assert self.app.state.last_outcome is result

    def test_gibberish_is_empty(self):
        self.llm.chat.return_value = "product"
        self.llm.generate_json.return_value = None

        assert self.app.search("qwzx").status is FetchStatus.EMPTY
        assert self.app.state.is_idle

    def test_only_latest_search_lands(self, product_payload):
        executor = DeferredExecutor()
        app = TrustPulseApp(llm=self.llm, store=Store(), executor=executor)
        self.llm.chat.return_value = "product"

        def reply(prompt, *args, **kwargs):
            name = "Dior Homme" if "Dior Homme" in prompt else "Dior"
            return dict(product_payload, name=name)
        self.llm.generate_json.side_effect = reply

        app.search_async("Dior")
        app.search_async("Dior Homme")
        (first_fn, first_args), (second_fn, second_args) = executor.jobs
        second_fn(*second_args)
        first_fn(*first_args)

        assert app.state.product_insight.name == "Dior Homme"
        assert app.state.query == "Dior Homme"
        app.shutdown()


class TestReviews:

    def setup_method(self):
        self.llm = Mock()
        self.app = TrustPulseApp(llm=self.llm, store=Store())

    def test_review_without_user_prompts_login(self):
        assert self.app.post_review("Great!") is None
        assert self.app.state.show_auth_prompt
        assert self.app.state.local_reviews == ()

    def test_review_after_login_is_listed_first(self, product_payload):
        self.llm.chat.return_value = "product"
        self.llm.generate_json.return_value = product_payload
        self.app.search("iPhone 15")
        self.app.login(make_user("Sam"))

        review = self.app.post_review("Love it", rating=5)

        relevant = self.app.reviews("relevant")
        assert relevant[0] is review
        assert len(relevant) == 2
        assert review not in self.app.reviews("high")

    def test_blank_review_raises(self):
        self.app.login(make_user("Sam"))
        with pytest.raises(FormValidationError):
            self.app.post_review("  ")

    def test_reviews_without_insight(self):
        assert self.app.reviews() == []

    def test_similar_buckets(self, product_payload):
        self.llm.chat.return_value = "product"
        self.llm.generate_json.return_value = product_payload
        self.app.search("iPhone 15")

        buckets = self.app.similar_buckets()

        assert [p.name for p in buckets["Luxury"]] == ["Galaxy S24 Ultra"]
        assert [p.name for p in buckets["Casual"]] == ["Pixel 8"]


class TestDirectoryAndSession:

    def setup_method(self):
        self.app = TrustPulseApp(llm=Mock())

    def test_seeded_directory(self):
        names = [b.business_name for b in self.app.directory()]
        assert names == ["EcoTech Solutions", "Lumina Dental"]

    def test_dent_finds_lumina(self):
        assert [b.business_name for b in self.app.directory("dent")] == ["Lumina Dental"]
        assert self.app.directory("dent", "Services") == []

    def test_published_listing_comes_first(self):
        self.app.publish_business(name="Pulse Cafe", category="Food & Beverage")
        assert self.app.directory()[0].business_name == "Pulse Cafe"

    def test_views(self):
        self.app.set_view(ViewConstants.COLLAB_HUB)
        assert self.app.state.view == ViewConstants.COLLAB_HUB
        self.app.go_home()
        assert self.app.state.view == ViewConstants.MARKETPLACE

    def test_logout(self):
        self.app.login(make_user("Sam"))
        self.app.logout()
        assert self.app.state.current_user is None

    def test_update_user(self):
        self.app.login(make_user("Sam"))
        creator = self.app.state.current_user.model_copy(update={"is_creator": True})

        self.app.update_user(creator)

        assert self.app.state.current_user.is_creator

    def test_verify_creator_without_user_prompts_login(self):
        assert self.app.verify_creator("@sam") is None
        assert self.app.state.show_auth_prompt
        assert self.app.state.current_user is None

    def test_verify_creator_unlocks_collaboration_reviews(self):
        self.app.login(make_user("Sam"))

        creator = self.app.verify_creator("@sam", "YouTube")

        assert self.app.state.current_user is creator
        assert creator.is_influencer and creator.influence_score == 88
        assert self.app.post_review("Sponsored unboxing", collaboration=True).is_collaboration

    def test_verify_creator_blank_handle_raises(self):
        self.app.login(make_user("Sam"))
        with pytest.raises(FormValidationError):
            self.app.verify_creator("  ")
        assert not self.app.state.current_user.is_influencer
