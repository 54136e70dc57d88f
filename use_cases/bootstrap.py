"""Startup orchestration for application bootstrap."""

from dataclasses import dataclass
from typing import Literal, Tuple

from infrastructure import config
from utils import session_manager

StartupStatus = Literal["CONTINUE", "STOP"]


@dataclass(frozen=True)
class StartupResult:
    """Result contract for startup/bootstrap orchestration."""

    status: StartupStatus
    planned_steps: Tuple[str, ...]


def run_startup() -> StartupResult:
    """Seed session state and build the per-session services once."""
    executed_steps = []

    session_manager.init_session_state()
    executed_steps.append("init_session_state")

    # Services live for the whole browser session; reruns reuse them.
    if session_manager.st.session_state.session_store is None:
        settings = config.load_settings()
        executed_steps.append("load_settings")
        session_manager.build_services(settings)
        executed_steps.append("build_services")

    return StartupResult(status="CONTINUE", planned_steps=tuple(executed_steps))
