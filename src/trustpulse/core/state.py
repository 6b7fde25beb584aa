"""Application state and the named actions that change it.

``reduce`` is pure: it takes the current state and one action and returns the
next state. ``Store`` owns the current state, serialises dispatches and hands
out request ids so a search response that is no longer the latest one is
dropped instead of overwriting newer results.
"""

import itertools
import logging
import threading
from dataclasses import dataclass, replace
from typing import Callable, List, Optional, Tuple, Union

from .constants import ViewConstants
from .models import BrandInsight, BusinessListing, ProductInsight, QueryKind, SocialComment, User
from .results import FetchResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AppState:
    view: str = ViewConstants.MARKETPLACE
    query: str = ""
    is_loading: bool = False
    product_insight: Optional[ProductInsight] = None
    brand_insight: Optional[BrandInsight] = None
    local_reviews: Tuple[SocialComment, ...] = ()
    businesses: Tuple[BusinessListing, ...] = ()
    current_user: Optional[User] = None
    show_auth_prompt: bool = False
    active_request: int = 0
    last_outcome: Optional[FetchResult] = None

    @property
    def is_idle(self) -> bool:
        """Nothing loaded and nothing loading: show the landing content."""
        return not self.is_loading and self.product_insight is None and self.brand_insight is None


# ---- Actions ----

@dataclass(frozen=True)
class SearchStarted:
    request_id: int
    query: str


@dataclass(frozen=True)
class SearchResolved:
    request_id: int
    kind: QueryKind
    result: FetchResult


@dataclass(frozen=True)
class ReviewPosted:
    review: SocialComment


@dataclass(frozen=True)
class BusinessAdded:
    listing: BusinessListing


@dataclass(frozen=True)
class LoggedIn:
    user: User


@dataclass(frozen=True)
class UserUpdated:
    user: User


@dataclass(frozen=True)
class LoggedOut:
    pass


@dataclass(frozen=True)
class LoginPrompted:
    pass


@dataclass(frozen=True)
class AuthDismissed:
    pass


@dataclass(frozen=True)
class ViewChanged:
    view: str


@dataclass(frozen=True)
class HomeReset:
    pass


Action = Union[SearchStarted, SearchResolved, ReviewPosted, BusinessAdded, LoggedIn, UserUpdated,
               LoggedOut, LoginPrompted, AuthDismissed, ViewChanged, HomeReset]


def reduce(state: AppState, action: Action) -> AppState:
    """Return the state that follows ``action``."""
    if isinstance(action, SearchStarted):
        return replace(
            state,
            view=ViewConstants.MARKETPLACE,
            query=action.query,
            is_loading=True,
            product_insight=None,
            brand_insight=None,
            local_reviews=(),
            active_request=action.request_id,
            last_outcome=None,
        )

    if isinstance(action, SearchResolved):
        if action.request_id != state.active_request:
            logger.info(f"Dropping stale response for request {action.request_id} "
                        f"(active: {state.active_request})")
            return state
        result = action.result
        product = result.value if result.ok and action.kind == QueryKind.PRODUCT else None
        brand = result.value if result.ok and action.kind == QueryKind.BRAND else None
        return replace(state, is_loading=False, product_insight=product, brand_insight=brand,
                       last_outcome=result)

    if isinstance(action, ReviewPosted):
        return replace(state, local_reviews=(action.review,) + state.local_reviews)

    if isinstance(action, BusinessAdded):
        return replace(state, businesses=(action.listing,) + state.businesses)

    if isinstance(action, (LoggedIn, UserUpdated)):
        return replace(state, current_user=action.user, show_auth_prompt=False)

    if isinstance(action, LoggedOut):
        return replace(state, current_user=None)

    if isinstance(action, LoginPrompted):
        return replace(state, show_auth_prompt=True)

    if isinstance(action, AuthDismissed):
        return replace(state, show_auth_prompt=False)

    if isinstance(action, ViewChanged):
        if action.view not in ViewConstants.ALL:
            raise ValueError(f"Unknown view: {action.view!r}")
        return replace(state, view=action.view)

    if isinstance(action, HomeReset):
        return replace(state, view=ViewConstants.MARKETPLACE, product_insight=None, brand_insight=None)

    raise TypeError(f"Unsupported action: {action!r}")


class Store:
    """Holds the current AppState and applies actions one at a time."""

    def __init__(self, initial: Optional[AppState] = None):
        self._state = initial or AppState()
        self._lock = threading.Lock()
        self._request_ids = itertools.count(1)
        self._listeners: List[Callable[[AppState], None]] = []

    @property
    def state(self) -> AppState:
        return self._state

    def next_request_id(self) -> int:
        with self._lock:
            return next(self._request_ids)

    def subscribe(self, listener: Callable[[AppState], None]) -> Callable[[], None]:
        """Register a listener called after every dispatch; returns an unsubscribe callable.

        Unsubscribing more than once is a no-op.
        """
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def dispatch(self, action: Action) -> AppState:
        with self._lock:
            self._state = reduce(self._state, action)
            current = self._state
            listeners = list(self._listeners)
        for listener in listeners:
            listener(current)
        return current
