"""Static page routing table and path resolution."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional, Tuple


class Page(str, Enum):
    HOME = "home"
    AUTH = "auth"
    START = "start"
    WELCOME = "welcome"
    CHOOSE_ACCOUNT_TYPE = "choose_account_type"
    ONBOARDING = "onboarding"
    DASHBOARD = "dashboard"
    DISCOVER = "discover"
    ADMIN = "admin"
    VENDORS = "vendors"
    VENDOR_PROFILE = "vendor_profile"
    RESTAURANT_PROFILE = "restaurant_profile"
    SERVICES = "services"
    SERVICE_PROVIDER_PROFILE = "service_provider_profile"
    EVENTS = "events"
    MY_EVENTS = "my_events"
    EVENT_DETAIL = "event_detail"
    DEAL_DETAIL = "deal_detail"
    CART = "cart"
    CHECKOUT = "checkout"
    ORDERS = "orders"
    FAVORITES = "favorites"
    MY_DEALS = "my_deals"
    LOYALTY = "loyalty"
    PROFILE = "profile"
    MESSAGES = "messages"
    MESSAGE_THREAD = "message_thread"
    NOT_FOUND = "not_found"


class Paths:
    AUTH = "/auth"
    START = "/start"
    WELCOME = "/welcome"
    CHOOSE_ACCOUNT_TYPE = "/choose-account-type"
    ONBOARDING = "/onboarding"
    DASHBOARD = "/dashboard"
    DISCOVER = "/discover"
    ADMIN = "/admin"


def _split(path: str) -> Tuple[str, ...]:
    return tuple(part for part in path.split("/") if part)


@dataclass(frozen=True)
class Route:
    pattern: str
    page: Page
    protected: bool = False
    require_onboarding: bool = False
    audience: Optional[str] = None  # "admin" | "business"
    segments: Tuple[str, ...] = field(init=False, repr=False)

    def __post_init__(self):
        object.__setattr__(self, "segments", _split(self.pattern))


@dataclass(frozen=True)
class RouteMatch:
    route: Route
    path: str
    params: Dict[str, str] = field(default_factory=dict)
    redirect_to: Optional[str] = None


ROUTES: Tuple[Route, ...] = (
    Route("/", Page.HOME),
    Route(Paths.AUTH, Page.AUTH),
    Route(Paths.START, Page.START),
    Route(Paths.WELCOME, Page.WELCOME, protected=True),
    Route(Paths.CHOOSE_ACCOUNT_TYPE, Page.CHOOSE_ACCOUNT_TYPE, protected=True),
    Route(Paths.ONBOARDING, Page.ONBOARDING, protected=True),
    Route(Paths.DASHBOARD, Page.DASHBOARD, protected=True, require_onboarding=True, audience="business"),
    Route(Paths.DISCOVER, Page.DISCOVER),
    Route(Paths.ADMIN, Page.ADMIN, protected=True, audience="admin"),
    Route("/vendors", Page.VENDORS),
    Route("/vendor/:id", Page.VENDOR_PROFILE),
    Route("/restaurant/:id", Page.RESTAURANT_PROFILE),
    Route("/services", Page.SERVICES),
    Route("/services/:id", Page.SERVICE_PROVIDER_PROFILE),
    Route("/events", Page.EVENTS),
    Route("/events/my", Page.MY_EVENTS, protected=True, require_onboarding=True),
    Route("/events/:id", Page.EVENT_DETAIL),
    Route("/deals/:id", Page.DEAL_DETAIL),
    Route("/cart", Page.CART),
    Route("/checkout", Page.CHECKOUT, protected=True, require_onboarding=True),
    Route("/orders", Page.ORDERS, protected=True, require_onboarding=True),
    Route("/favorites", Page.FAVORITES, protected=True, require_onboarding=True),
    Route("/my-deals", Page.MY_DEALS, protected=True, require_onboarding=True),
    Route("/loyalty", Page.LOYALTY, protected=True, require_onboarding=True),
    Route("/profile", Page.PROFILE, protected=True, require_onboarding=True),
    Route("/messages", Page.MESSAGES, protected=True, require_onboarding=True),
    Route("/messages/:userId", Page.MESSAGE_THREAD, protected=True, require_onboarding=True),
)

NOT_FOUND_ROUTE = Route("*", Page.NOT_FOUND)

LEGACY_REDIRECTS: Dict[str, str] = {
    "/my-events": "/events/my",
    "/vendor-dashboard": Paths.DASHBOARD,
    "/restaurant-dashboard": Paths.DASHBOARD,
    "/service-provider-dashboard": Paths.DASHBOARD,
    "/login": Paths.AUTH,
    "/signup": Paths.AUTH,
}


def normalize_path(raw: Optional[str]) -> str:
    """Drop query and fragment, force a leading slash, trim the trailing one."""
    if not raw:
        return "/"
    path = raw.split("?", 1)[0].split("#", 1)[0].strip()
    if not path.startswith("/"):
        path = "/" + path
    if len(path) > 1:
        path = path.rstrip("/") or "/"
    return path


def _match(route: Route, segments: Tuple[str, ...]) -> Optional[Dict[str, str]]:
    if len(route.segments) != len(segments):
        return None
    params = {}
    for expected, actual in zip(route.segments, segments):
        if expected.startswith(":"):
            params[expected[1:]] = actual
        elif expected != actual:
            return None
    return params


def resolve_route(raw_path: Optional[str]) -> RouteMatch:
    """Map a requested path to its route; static segments win over params."""
    path = normalize_path(raw_path)

    legacy_target = LEGACY_REDIRECTS.get(path)
    if legacy_target is not None:
        return RouteMatch(route=NOT_FOUND_ROUTE, path=path, redirect_to=legacy_target)

    segments = _split(path)
    for route in ROUTES:
        params = _match(route, segments)
        if params is not None:
            return RouteMatch(route=route, path=path, params=params)

    return RouteMatch(route=NOT_FOUND_ROUTE, path=path)
