import streamlit as st
import auth
import ui
from use_cases.route_flow import Paths
from use_cases.session_models import UserSession
from utils import session_manager

SLIDES = [
    {
        "title": "What is Rise Local?",
        "content": "Rise Local connects local people with local businesses through exclusive deals, visibility, and shared values.",
        "emphasis": "Your neighborhood, your businesses, your deals.",
    },
    {
        "title": "For Locals & Shoppers",
        "content": "Discover nearby local businesses. Unlock exclusive local deals. Support businesses that align with your values.",
        "emphasis": "No big corporations. No clutter. Hyper-local focus.",
    },
    {
        "title": "For Local Businesses",
        "content": "Create a business profile. Post deals to attract local customers. Get discovered by people who want to shop local.",
        "emphasis": "Simple setup. No complex systems. Community support.",
    },
    {
        "title": "Built to Support Local",
        "content": "Consumers browse & unlock deals. Businesses gain exposure and foot traffic.",
        "emphasis": "Deals-based marketplace. Community over corporations.",
    },
]

def _finish(user: UserSession, role=None):
    if auth.complete_welcome(st.session_state.auth_token, user, role=role):
        session_manager.navigate(Paths.START)
    else:
        st.error("Could not save your choice. Please try again.")

def render_welcome(user: UserSession):
    if "welcome_slide" not in st.session_state:
        st.session_state.welcome_slide = 0

    idx = min(st.session_state.welcome_slide, len(SLIDES) - 1)
    slide = SLIDES[idx]
    st.title(f"Welcome to {ui.BRAND_NAME}")
    ui.render_card(slide["title"], slide["content"], slide["emphasis"])
    st.caption(f"{idx + 1} / {len(SLIDES)}")

    c_prev, c_next = st.columns(2)
    with c_prev:
        if idx > 0 and st.button("← Back", use_container_width=True):
            st.session_state.welcome_slide = idx - 1
            st.rerun()
    with c_next:
        if idx < len(SLIDES) - 1 and st.button("Next →", use_container_width=True):
            st.session_state.welcome_slide = idx + 1
            st.rerun()

    if idx == len(SLIDES) - 1:
        st.divider()
        st.subheader("How will you use Rise Local?")
        c_consumer, c_business = st.columns(2)
        with c_consumer:
            if st.button("🛍 I'm here to shop local", use_container_width=True, type="primary"):
                _finish(user, role="buyer" if user.role is None else None)
        with c_business:
            if st.button("🏪 I run a local business", use_container_width=True):
                _finish(user, role="vendor" if user.role is None else None)

def render_choose_account_type(user: UserSession):
    st.title("Choose Account Type")
    st.caption("Tell us how you want to use Rise Local so we can guide you correctly.")

    if st.button("👤 I'm a Customer: find deals from local businesses", use_container_width=True):
        session_manager.clear_stored_redirect()
        _finish(user, role="buyer")
    if st.button("🏪 I'm a Business: create a profile and list deals", use_container_width=True):
        session_manager.clear_stored_redirect()
        _finish(user, role="vendor")
    if st.button("Log out", type="secondary"):
        session_manager.logout()
