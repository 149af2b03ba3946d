"""Home page - Simulation controls and live observation."""
import atexit
import logging
from pathlib import Path

import streamlit as st
from dotenv import load_dotenv

from src.config.settings import Settings
from src.dashboard.runtime import DashboardRuntime
from src.orchestrator.models import ActionResult, ActionStatus
from src.simulation.models import FIELD_NAMES, field_label


CONFIG_PATH = Path("config/settings.yaml")

st.set_page_config(page_title="Ticket System Simulation", page_icon="🎟️", layout="wide")


def load_settings() -> Settings:
    load_dotenv()
    if CONFIG_PATH.exists():
        return Settings.from_yaml(CONFIG_PATH)
    return Settings()


@st.cache_resource
def get_runtime(base_url: str, _settings: Settings) -> DashboardRuntime:
    """Return the process-wide runtime for a service, starting it on first use.

    Every browser session shares it, so reloading a tab never adds a poller.
    """
    logging.basicConfig(
        level=_settings.system.log_level,
        format="[%(asctime)s] %(levelname)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    runtime = DashboardRuntime(_settings)
    runtime.start()
    atexit.register(runtime.shutdown)
    return runtime


def run_action(action) -> None:
    """Run a control action, then redraw the page from the new state."""
    st.session_state.last_result = action()
    st.rerun()


def show_result(result: ActionResult) -> None:
    if result.status == ActionStatus.BLOCKED:
        st.warning(result.message, icon="⚠️")
    elif result.status == ActionStatus.SKIPPED:
        st.info(result.message)
    elif result.status == ActionStatus.TIMED_OUT:
        st.error(result.message)


loaded = load_settings()
runtime = get_runtime(loaded.service.base_url, loaded)
settings = runtime.settings

st.title("🎟️ Ticket System Simulation")

last_result = st.session_state.pop("last_result", None)
if last_result is not None:
    show_result(last_result)

form_col, logs_col = st.columns([2, 3])

with form_col:
    view = runtime.snapshot()
    for name in FIELD_NAMES:
        value = st.number_input(
            field_label(name),
            value=getattr(view.config, name),
            step=1,
            key=f"field_{name}",
        )
        if value != getattr(view.config, name):
            runtime.update_field(name, int(value))
            view = runtime.snapshot()
        if name in view.validation_errors:
            st.error(view.validation_errors[name])

    start_col, stop_col, configure_col = st.columns(3)
    with start_col:
        if st.button("▶️ Start", key="start", type="primary", disabled=not view.can_start, use_container_width=True):
            run_action(runtime.start_simulation)
    with stop_col:
        if st.button("⏹️ Stop", key="stop", disabled=not view.can_stop, use_container_width=True):
            run_action(runtime.stop_simulation)
    with configure_col:
        if st.button("💾 Configure", key="configure", disabled=not view.can_configure, use_container_width=True):
            run_action(runtime.configure)


@st.fragment(run_every=settings.dashboard.refresh_interval_seconds)
def logs_panel() -> None:
    view = runtime.snapshot()

    st.subheader("📋 Simulation Logs")
    if view.error:
        st.error(view.error)

    with st.container(height=400):
        for line in view.display_logs[-settings.dashboard.max_logs_displayed:]:
            st.text(line)

    col1, col2 = st.columns(2)
    with col1:
        st.metric("Ticket Pool Size", view.ticket_pool_size)
    with col2:
        st.metric("Status", view.run_state.value.upper())


with logs_col:
    logs_panel()
