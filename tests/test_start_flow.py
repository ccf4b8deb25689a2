import pytest

from use_cases.redirect_policy import GateConfig
from use_cases.start_flow import StartAction, evaluate_start
from use_cases.session_models import UserSession


def _user(role="buyer", account_type=None, onboarding_complete=True, welcome_completed=True):
    return UserSession(
        id="u-1",
        role=role,
        account_type=account_type,
        onboarding_complete=onboarding_complete,
        welcome_completed=welcome_completed,
    )


def test_anonymous_goes_to_auth_and_clears_redirect() -> None:
    decision = evaluate_start(None, "/vendor/123")

    assert decision.action == StartAction.AUTH
    assert decision.target == "/auth"
    assert decision.stored_redirect is None
    assert decision.discarded_redirect == "/vendor/123"


def test_onboarded_buyer_without_redirect_lands_on_discover() -> None:
    decision = evaluate_start(_user(role="buyer"), None)

    assert decision.action == StartAction.CONSUMER_HOME
    assert decision.target == "/discover"
    assert decision.discarded_redirect is None


def test_vendor_with_pending_onboarding_goes_to_onboarding() -> None:
    decision = evaluate_start(_user(role="vendor", onboarding_complete=False), "/messages/42")

    assert decision.action == StartAction.ONBOARDING
    assert decision.target == "/onboarding"
    assert decision.stored_redirect is None
    assert decision.discarded_redirect == "/messages/42"


def test_gate_path_redirect_falls_back_to_default_home() -> None:
    decision = evaluate_start(_user(role="buyer"), "/onboarding")

    assert decision.target == "/discover"
    assert decision.stored_redirect is None
    assert decision.discarded_redirect == "/onboarding"


def test_admin_never_resumes_deep_link() -> None:
    decision = evaluate_start(_user(role="admin", onboarding_complete=False), "/messages/42")

    assert decision.action == StartAction.ADMIN
    assert decision.target == "/admin"
    assert decision.stored_redirect is None
    assert decision.discarded_redirect == "/messages/42"


@pytest.mark.parametrize("role", ["buyer", "vendor", "restaurant", "service_provider", "admin", None, "wizard"])
@pytest.mark.parametrize("stored", [None, "/vendor/123", "/auth"])
def test_welcome_wins_over_everything(role, stored) -> None:
    decision = evaluate_start(_user(role=role, welcome_completed=False), stored)

    assert decision.action == StartAction.WELCOME
    assert decision.target == "/welcome"
    assert decision.stored_redirect is None


@pytest.mark.parametrize("account_type", [None, "unknown", "", "partner"])
def test_ambiguous_identity_goes_to_chooser(account_type) -> None:
    decision = evaluate_start(_user(role="wizard", account_type=account_type), "/vendor/123")

    assert decision.action == StartAction.CHOOSE_ACCOUNT_TYPE
    assert decision.target == "/choose-account-type"
    assert decision.stored_redirect is None


def test_account_type_alone_resolves_identity() -> None:
    assert evaluate_start(_user(role=None, account_type="business"), None).target == "/dashboard"
    assert evaluate_start(_user(role=None, account_type="user"), None).target == "/discover"


def test_buyer_with_pending_onboarding_goes_to_discover_and_drops_redirect() -> None:
    decision = evaluate_start(_user(role="buyer", onboarding_complete=False), "/orders")

    assert decision.target == "/discover"
    assert decision.discarded_redirect == "/orders"


@pytest.mark.parametrize(
    "role,home",
    [("buyer", "/discover"), ("vendor", "/dashboard"), ("restaurant", "/dashboard"), ("service_provider", "/dashboard")],
)
def test_redirect_is_consumed_exactly_once(role, home) -> None:
    user = _user(role=role)

    first = evaluate_start(user, "/messages/42")
    assert first.action == StartAction.RESUME_REDIRECT
    assert first.target == "/messages/42"
    assert first.stored_redirect is None
    assert first.discarded_redirect is None

    second = evaluate_start(user, first.stored_redirect)
    assert second.target == home


@pytest.mark.parametrize(
    "user",
    [
        None,
        _user(welcome_completed=False),
        _user(role="admin"),
        _user(role=None),
        _user(role="vendor", onboarding_complete=False),
        _user(role="vendor"),
        _user(role="buyer"),
    ],
)
def test_second_pass_is_a_fixed_point(user) -> None:
    first = evaluate_start(user, "/vendor/9")
    second = evaluate_start(user, first.stored_redirect)
    third = evaluate_start(user, second.stored_redirect)

    assert second.stored_redirect is None
    assert third.target == second.target


@pytest.mark.parametrize(
    "stored",
    ["//evil.example.com", "https://evil.example.com/x", "/\\evil.example.com", "/a@b", "/start?next=/x", "/login", "/welcome/2", ""],
)
def test_unsafe_or_gate_redirects_are_never_followed(stored) -> None:
    decision = evaluate_start(_user(role="buyer"), stored)

    assert decision.target == "/discover"
    assert decision.stored_redirect is None


def test_configured_extra_gate_path_is_discarded() -> None:
    config = GateConfig(gate_paths=("/auth", "/start", "/onboarding", "/welcome", "/choose-account-type", "/verify-email"))

    decision = evaluate_start(_user(role="vendor"), "/verify-email", config)

    assert decision.target == "/dashboard"
    assert decision.discarded_redirect == "/verify-email"


def test_redirect_keeps_query_string() -> None:
    decision = evaluate_start(_user(role="buyer"), "/deals/5?claim=1")

    assert decision.target == "/deals/5?claim=1"


@pytest.mark.parametrize("stored", ["/no-such-page", "/vendor", "/my-events", "/vendor-dashboard"])
def test_unknown_or_legacy_redirect_is_discarded(stored) -> None:
    decision = evaluate_start(_user(role="buyer"), stored)

    assert decision.action == StartAction.CONSUMER_HOME
    assert decision.target == "/discover"
    assert decision.stored_redirect is None
    assert decision.discarded_redirect == stored


def test_redirect_outside_user_audience_is_discarded() -> None:
    decision = evaluate_start(_user(role="buyer"), "/dashboard")

    assert decision.target == "/discover"
    assert decision.discarded_redirect == "/dashboard"

    vendor = evaluate_start(_user(role="vendor"), "/dashboard")
    assert vendor.action == StartAction.RESUME_REDIRECT
    assert vendor.target == "/dashboard"
