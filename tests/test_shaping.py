"""Tests for presentation shaping."""

import pytest

from trustpulse.core.models import (
    BusinessListing, CategorizedPulse, PricePoint, ProductInsight, SimilarProduct, SocialComment,
)
from trustpulse.core.shaping import (
    STYLE_BUCKETS, bucket_by_style, filter_listings, label_price_points, listing_matches,
    merge_relevant_reviews, pulse_pillars, reviews_for_tab, score_to_width,
)


def _similar(name, style):
    return SimilarProduct(name=name, image_url="", style_category=style)


def _listing(name, category, description=""):
    return BusinessListing(id=name, business_name=name, category=category, description=description)


class TestBucketByStyle:

    def test_all_buckets_present_in_order(self):
        groups = bucket_by_style([])
        assert list(groups) == list(STYLE_BUCKETS)
        assert all(items == [] for items in groups.values())

    def test_none_input(self):
        assert list(bucket_by_style(None)) == ["Luxury", "Comfort", "Aesthetics", "Casual"]

    def test_unknown_style_goes_to_casual(self):
        a = _similar("A", "Luxury")
        b = _similar("B", "Unknown")

        groups = bucket_by_style([a, b])

        assert groups == {"Luxury": [a], "Comfort": [], "Aesthetics": [], "Casual": [b]}

    def test_preserves_input_order_and_completeness(self):
        items = [_similar(str(i), style) for i, style in
                 enumerate(["Casual", "Comfort", "Casual", "Aesthetics", "Sporty", "Luxury"])]

        groups = bucket_by_style(items)

        assert sum(len(v) for v in groups.values()) == len(items)
        assert [i.name for i in groups["Casual"]] == ["0", "2", "4"]

    def test_idempotent(self):
        items = [_similar("A", "Comfort"), _similar("B", "Aesthetics")]
        assert bucket_by_style(items) == bucket_by_style(items)


class TestReviews:

    def setup_method(self):
        self.fetched = [SocialComment(user="r1", text="fetched one", score=4)]
        self.positive = [SocialComment(user="p1", text="great", score=5)]
        self.negative = [SocialComment(user="n1", text="bad", score=1)]
        self.local = [SocialComment(user="me", text="newest", score=5),
                      SocialComment(user="me", text="older", score=3)]
        self.insight = ProductInsight(name="X", top_relevant_reviews=self.fetched,
                                      top_positive_reviews=self.positive, top_negative_reviews=self.negative)

    def test_local_reviews_come_first(self):
        merged = merge_relevant_reviews(self.local, self.fetched)
        assert [r.text for r in merged] == ["newest", "older", "fetched one"]

    def test_merge_does_not_mutate_inputs(self):
        merge_relevant_reviews(self.local, self.fetched)
        assert len(self.local) == 2
        assert len(self.fetched) == 1

    def test_relevant_tab_includes_local(self):
        assert reviews_for_tab("relevant", self.insight, self.local)[0].text == "newest"

    def test_high_and_low_tabs_exclude_local(self):
        assert reviews_for_tab("high", self.insight, self.local) == self.positive
        assert reviews_for_tab("low", self.insight, self.local) == self.negative

    def test_unknown_tab(self):
        with pytest.raises(ValueError):
            reviews_for_tab("newest", self.insight)


class TestDirectoryFilter:

    def setup_method(self):
        self.eco = _listing("EcoTech Solutions", "Services", "Net-zero logistics")
        self.lumina = _listing("Lumina Dental", "Health", "Cosmetic dentistry")
        self.listings = [self.eco, self.lumina]

    def test_term_matches_name_case_insensitively(self):
        assert filter_listings(self.listings, "dent") == [self.lumina]
        assert filter_listings(self.listings, "ECOTECH") == [self.eco]

    def test_term_matches_description(self):
        assert filter_listings(self.listings, "logistics") == [self.eco]

    def test_category_and_term_both_apply(self):
        assert filter_listings(self.listings, "dent", "Services") == []
        assert filter_listings(self.listings, "dent", "Health") == [self.lumina]

    def test_all_category_with_empty_term_keeps_everything(self):
        assert filter_listings(self.listings) == self.listings

    def test_category_is_exact(self):
        assert not listing_matches(self.lumina, "", "health")


class TestScores:

    @pytest.mark.parametrize("score,width", [(0, 0), (50, 50), (100, 100), (87.5, 87.5)])
    def test_score_to_width(self, score, width):
        assert score_to_width(score) == width

    def test_score_to_width_scales_track(self):
        assert score_to_width(50, track=320) == 160

    def test_out_of_range_passes_through(self):
        assert score_to_width(120) == 120
        assert score_to_width(-5) == -5

    def test_pulse_pillars(self):
        rows = pulse_pillars(CategorizedPulse(quality=90, durability=80, value=65, utility=88))

        assert [r["key"] for r in rows] == ["quality", "durability", "value", "utility"]
        assert rows[0]["label"] == "Materials & Finish"
        assert rows[2]["width"] == 65


class TestPricePoints:

    def test_first_entry_is_best_value(self):
        prices = [PricePoint(store="Amazon", price="$799"), PricePoint(store="eBay", price="$760")]

        labelled = label_price_points(prices)

        assert [(p.store, best) for p, best in labelled] == [("Amazon", True), ("eBay", False)]

    def test_empty(self):
        assert label_price_points(None) == []
        assert label_price_points([]) == []
