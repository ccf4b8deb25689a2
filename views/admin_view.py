import streamlit as st
import pandas as pd
import auth
from infrastructure.repositories.sqlite_audit_repository import AuditAction
from use_cases.redirect_policy import DEFAULT_CONFIG

AUDIT_COLUMNS = ["id", "Time (UTC)", "User", "Role", "Action", "Target type", "Target", "Metadata", "IP", "Result"]

def _render_audit_tab():
    c1, c2, c3 = st.columns([1.2, 1.2, 0.8])
    action_filter = c1.selectbox("Action", ["All"] + [a.value for a in AuditAction])
    user_filter = c2.text_input("User id contains", "")
    limit = c3.number_input("Rows", min_value=10, max_value=1000, value=100, step=10)

    logs = auth.get_audit_repo().get_logs(
        limit=int(limit),
        action_filter=action_filter,
        user_filter=user_filter.strip() or None,
    )
    if not logs:
        st.info("No audit events yet.")
        return

    logs_df = pd.DataFrame(logs, columns=AUDIT_COLUMNS)
    st.dataframe(logs_df.drop(columns=["id"]), use_container_width=True, hide_index=True)

    summary = logs_df.groupby("Action").size().rename("Events").reset_index().sort_values("Events", ascending=False)
    st.caption("Events by action (current selection)")
    st.dataframe(summary, use_container_width=True, hide_index=True)

def _render_gate_tab():
    config = st.session_state.get("gate_config") or DEFAULT_CONFIG
    st.caption("Paths that are never remembered or resumed as a post-login redirect.")
    gate_df = pd.DataFrame(
        [(p, "gate") for p in config.gate_paths] + [(p, "legacy") for p in config.legacy_paths],
        columns=["Path", "Kind"],
    )
    st.dataframe(gate_df, use_container_width=True, hide_index=True)
    st.caption("Extend the list through `[gate]` in gate.toml (`extra_gate_paths`, `extra_legacy_paths`).")

def render_admin_panel():
    st.header("⚙️ Admin Console")
    tab_audit, tab_gate = st.tabs(["🧾 Audit log", "🚧 Gate paths"])
    with tab_audit:
        _render_audit_tab()
    with tab_gate:
        _render_gate_tab()
