"""Startup orchestration for application bootstrap."""

from dataclasses import dataclass
from typing import Literal, Tuple

import auth
from use_cases import redirect_policy
from utils import session_manager

StartupStatus = Literal["CONTINUE", "STOP"]

GATE_CONFIG_PATH = "gate.toml"


@dataclass(frozen=True)
class StartupResult:
    """Result contract for startup/bootstrap orchestration."""

    status: StartupStatus
    planned_steps: Tuple[str, ...]


def run_startup() -> StartupResult:
    """Prepare audit storage, the session-state contract and the gate deny-list."""
    executed_steps = []

    auth.init_audit_db()
    executed_steps.append("init_audit_db")

    session_manager.init_session_state()
    executed_steps.append("init_session_state")

    # Loaded once per tab; editing gate.toml applies to new tabs.
    if session_manager.st.session_state.gate_config is None:
        config_path = auth.get_setting("GATE_CONFIG_PATH", GATE_CONFIG_PATH)
        session_manager.st.session_state.gate_config = redirect_policy.load_gate_config(config_path)
        executed_steps.append("load_gate_config")

    return StartupResult(status="CONTINUE", planned_steps=tuple(executed_steps))
