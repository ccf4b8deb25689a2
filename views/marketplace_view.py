import streamlit as st
import ui
from use_cases.route_flow import Page, Paths
from use_cases.session_models import UserSession, is_business
from utils import session_manager

PAGE_TITLES = {
    Page.HOME: "Shop local, live local",
    Page.DISCOVER: "Discover",
    Page.VENDORS: "Local vendors",
    Page.VENDOR_PROFILE: "Vendor",
    Page.RESTAURANT_PROFILE: "Restaurant",
    Page.SERVICES: "Services",
    Page.SERVICE_PROVIDER_PROFILE: "Service provider",
    Page.EVENTS: "Events",
    Page.MY_EVENTS: "My events",
    Page.EVENT_DETAIL: "Event",
    Page.DEAL_DETAIL: "Deal",
    Page.CART: "Cart",
    Page.CHECKOUT: "Checkout",
    Page.ORDERS: "Orders",
    Page.FAVORITES: "Favorites",
    Page.MY_DEALS: "My deals",
    Page.LOYALTY: "Loyalty",
    Page.PROFILE: "Profile",
    Page.MESSAGES: "Messages",
    Page.MESSAGE_THREAD: "Conversation",
}

BROWSE_LINKS = [
    ("Discover", Paths.DISCOVER),
    ("Vendors", "/vendors"),
    ("Services", "/services"),
    ("Events", "/events"),
]

def render_nav(user):
    with st.sidebar:
        st.subheader(ui.BRAND_NAME)
        for label, path in BROWSE_LINKS:
            if st.button(label, key=f"nav_{path}", use_container_width=True):
                session_manager.navigate(path)
        st.divider()
        if user is None:
            if st.button("Sign in", key="nav_signin", type="primary", use_container_width=True):
                session_manager.navigate(Paths.AUTH)
            return
        if is_business(user) and st.button("Dashboard", key="nav_dashboard", use_container_width=True):
            session_manager.navigate(Paths.DASHBOARD)
        if user.role == "admin" and st.button("Admin", key="nav_admin", use_container_width=True):
            session_manager.navigate(Paths.ADMIN)
        if st.button("Messages", key="nav_messages", use_container_width=True):
            session_manager.navigate("/messages")
        if st.button("Log out", key="logout_btn", type="secondary", use_container_width=True):
            session_manager.logout()

def render_page(page: Page, params, user):
    title = PAGE_TITLES.get(page, page.value.replace("_", " ").title())
    st.title(title)
    if params:
        st.caption(" · ".join(f"{k}: {v}" for k, v in params.items()))
    if page in (Page.HOME, Page.DISCOVER):
        ui.render_card(
            "Deals from your neighborhood",
            "Browse local vendors, restaurants and service providers.",
            "No big corporations. Hyper-local focus.",
        )
    else:
        st.info("This page is served by the Rise Local storefront.")

def render_onboarding(user: UserSession):
    st.title("Set up your business")
    st.caption("Complete your business profile in the Rise Local business app to unlock your dashboard.")
    if st.button("I've finished onboarding", type="primary"):
        # Re-enter the gate; the backend decides whether onboarding is complete.
        session_manager.navigate(Paths.START)

def render_dashboard(user: UserSession):
    st.title("Business dashboard")
    ui.render_card("Welcome back", f"Signed in as a {user.role or 'business'} account.")

def render_not_found(path):
    st.title("Page not found")
    st.caption(f"Nothing lives at {path}.")
    if st.button("Go home"):
        session_manager.navigate("/")
