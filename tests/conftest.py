"""Shared fixtures for TrustPulse tests."""

from unittest.mock import Mock

import pytest


@pytest.fixture
def product_payload():
    """A camelCase product report as the model returns it."""
    return {
        "name": "iPhone 15",
        "category": "Smartphones",
        "description": "Apple's 2023 flagship.",
        "brandScore": 87,
        "priceComparison": [
            {"store": "Amazon", "price": "$799", "link": "https://amazon.com/x", "availability": True},
            {"store": "Best Buy", "price": "$829", "link": "https://bestbuy.com/x", "availability": True},
            {"store": "eBay", "price": "$760", "link": "https://ebay.com/x", "availability": False},
        ],
        "sentiment": {"positive": 70, "neutral": 20, "negative": 10, "averageRating": 4.4,
                      "totalReviewsAnalyzed": 1200},
        "categorizedPulse": {"quality": 90, "durability": 80, "value": 65, "utility": 88},
        "topRelevantReviews": [
            {"user": "u/applefan", "text": "Battery finally lasts all day.", "score": 5, "source": "reddit"},
        ],
        "topPositiveReviews": [
            {"user": "Dana", "text": "Camera is superb.", "score": 5, "source": "amazon"},
        ],
        "topNegativeReviews": [
            {"user": "Lee", "text": "Runs hot while charging.", "score": 2, "source": "google"},
        ],
        "similarProducts": [
            {"name": "Pixel 8", "imageUrl": "https://img/pixel", "styleCategory": "Casual"},
            {"name": "Galaxy S24 Ultra", "imageUrl": "https://img/s24", "styleCategory": "Luxury"},
        ],
    }


@pytest.fixture
def brand_payload():
    return {
        "brandName": "Nike",
        "industry": "Sportswear",
        "description": "Athletic footwear and apparel.",
        "marketTrustScore": 82,
        "productCatalog": [
            {"name": "Air Max 90", "category": "Sneakers", "priceRange": "$120-$140", "imageUrl": "", "trustPulse": 85},
        ],
    }


@pytest.fixture
def llm():
    """A stand-in for the LLM service; configure replies per test."""
    return Mock()
