"""Application controller: wires classifier, fetcher and state together."""

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Dict, List, Optional

from .core.constants import DisplayConstants
from .core.forms import AuthRequiredError, build_business_listing, build_review, verify_creator
from .core.models import BusinessListing, SimilarProduct, SocialComment, User
from .core.results import FetchResult
from .core.shaping import bucket_by_style, filter_listings, reviews_for_tab
from .core.state import (
    AppState, AuthDismissed, BusinessAdded, HomeReset, LoggedIn, LoggedOut, LoginPrompted, ReviewPosted,
    SearchResolved, SearchStarted, Store, UserUpdated, ViewChanged,
)
from .services.classifier import classify_query
from .services.directory import load_seed_businesses
from .services.insights import InsightService
from .services.llm import LLMServiceFactory

logger = logging.getLogger(__name__)


class TrustPulseApp:
    """Owns the store and runs user actions against it.

    Searches never raise for AI-boundary problems: the outcome is recorded
    on the state and the view falls back to the idle landing content.
    """

    def __init__(self, llm=None, store: Optional[Store] = None, executor: Optional[ThreadPoolExecutor] = None):
        self.llm = llm or LLMServiceFactory.create()
        self.insights = InsightService(self.llm)
        self.store = store or Store(AppState(businesses=tuple(load_seed_businesses())))
        self._executor = executor

    @property
    def state(self) -> AppState:
        return self.store.state

    # ---- Search ----

    def search(self, query: str) -> FetchResult:
        request_id = self.store.next_request_id()
        self.store.dispatch(SearchStarted(request_id=request_id, query=query))
        return self._run_search(request_id, query)

    def search_async(self, query: str) -> Future:
        """Start a search in the background; overlapping searches resolve in any
        order and only the most recently started one lands in state."""
        if self._executor is None:
            self._executor = ThreadPoolExecutor(max_workers=4, thread_name_prefix="trustpulse-search")
        request_id = self.store.next_request_id()
        self.store.dispatch(SearchStarted(request_id=request_id, query=query))
        return self._executor.submit(self._run_search, request_id, query)

    def _run_search(self, request_id: int, query: str) -> FetchResult:
        kind = classify_query(query, self.llm)
        result = self.insights.fetch(kind, query)
        if not result.ok:
            logger.info(f"Search '{query}' ended {result.status.value}"
                        f"{f' ({result.failure.value})' if result.failure else ''}: {result.reason}")
        self.store.dispatch(SearchResolved(request_id=request_id, kind=kind, result=result))
        return result

    def shutdown(self) -> None:
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None

    # ---- Reviews ----

    def post_review(self, text: str, rating: int = 5, target: str = "trustpulse",
                    detailed_rating=None, collaboration: bool = False) -> Optional[SocialComment]:
        """Append a local review, or prompt for login when nobody verified is signed in.

        FormValidationError propagates for blank text or a bad rating.
        """
        try:
            review = build_review(self.state.current_user, text, rating, target, detailed_rating, collaboration)
        except AuthRequiredError:
            logger.info("Review blocked: sign-in required")
            self.store.dispatch(LoginPrompted())
            return None
        self.store.dispatch(ReviewPosted(review))
        return review

    def reviews(self, tab: str = "relevant") -> List[SocialComment]:
        insight = self.state.product_insight
        if insight is None:
            return []
        return reviews_for_tab(tab, insight, self.state.local_reviews)

    def similar_buckets(self) -> Dict[str, List[SimilarProduct]]:
        insight = self.state.product_insight
        return bucket_by_style(insight.similar_products if insight else [])

    # ---- Directory ----

    def publish_business(self, **fields) -> BusinessListing:
        listing = build_business_listing(**fields)
        self.store.dispatch(BusinessAdded(listing))
        return listing

    def directory(self, term: str = "", category: str = DisplayConstants.ALL_CATEGORIES) -> List[BusinessListing]:
        return filter_listings(self.state.businesses, term, category)

    # ---- Session ----

    def login(self, user: User) -> None:
        self.store.dispatch(LoggedIn(user))

    def update_user(self, user: User) -> None:
        self.store.dispatch(UserUpdated(user))

    def verify_creator(self, handle: str, platform: str = "YouTube") -> Optional[User]:
        """Verify the signed-in user as a creator, or prompt for login.

        FormValidationError propagates for a blank handle or unknown platform.
        """
        try:
            user = verify_creator(self.state.current_user, handle, platform)
        except AuthRequiredError:
            logger.info("Creator verification blocked: sign-in required")
            self.store.dispatch(LoginPrompted())
            return None
        logger.info(f"Verified {user.name} as a {platform} creator ({handle.strip()})")
        self.store.dispatch(UserUpdated(user))
        return user

    def logout(self) -> None:
        self.store.dispatch(LoggedOut())

    def set_view(self, view: str) -> None:
        self.store.dispatch(ViewChanged(view))

    def dismiss_auth(self) -> None:
        self.store.dispatch(AuthDismissed())

    def go_home(self) -> None:
        self.store.dispatch(HomeReset())
