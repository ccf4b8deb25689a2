import html
import streamlit as st

BRAND_NAME = "Rise Local"

def setup_style():
    st.markdown("""
    <style>
        @import url('https://fonts.googleapis.com/css2?family=Manrope:wght@400;600;700;800&display=swap');

        :root {
            --brand: #1f6f5c;
            --brand-soft: rgba(31, 111, 92, 0.10);
            --text-main: #1b2a24;
            --text-soft: rgba(27, 42, 36, 0.68);
        }

        html, body, .stApp {
            font-family: 'Manrope', sans-serif;
            color: var(--text-main);
        }

        .rl-card {
            border: 1px solid var(--brand-soft);
            border-radius: 14px;
            padding: 1.1rem 1.3rem;
            margin-bottom: 0.8rem;
            background: #ffffff;
        }

        .rl-emphasis {
            color: var(--brand);
            font-weight: 700;
        }

        .rl-muted {
            color: var(--text-soft);
        }

        /* Hide Streamlit's own multipage nav; paths go through ?path= */
        [data-testid="stSidebarNav"] { display: none; }
    </style>
    """, unsafe_allow_html=True)

def render_card(title, body, emphasis=None):
    emphasis_html = f'<div class="rl-emphasis">{html.escape(emphasis)}</div>' if emphasis else ""
    st.markdown(
        f'<div class="rl-card"><h4>{html.escape(title)}</h4><div class="rl-muted">{html.escape(body)}</div>{emphasis_html}</div>',
        unsafe_allow_html=True,
    )

def show_redirecting(target):
    st.caption(f"Redirecting to {target}…")
