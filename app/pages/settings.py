"""Settings page — toggle mock/live mode, select scenario, view integration status."""

import streamlit as st

from app.state.session import get_session_settings, set_session_settings
from integrations.mock.base import describe_scenario


def render() -> None:
    st.header("Settings")

    settings = get_session_settings()

    # ------------------------------------------------------------------
    # Global mode
    # ------------------------------------------------------------------
    st.subheader("Global Mode")
    mode = st.radio(
        "Approval mode",
        options=["mock", "live"],
        index=0 if settings.approval_mode == "mock" else 1,
        horizontal=True,
        help="In mock mode, all integrations use simulated data. Switch to live to use the pipeline API.",
    )

    # ------------------------------------------------------------------
    # Mock scenario selector
    # ------------------------------------------------------------------
    st.subheader("Mock Scenario")
    scenarios = settings.available_scenarios
    scenario = st.selectbox(
        "Active scenario",
        options=scenarios,
        index=scenarios.index(settings.mock_scenario) if settings.mock_scenario in scenarios else 0,
        help="Select which operator, grants and stage the mock pipeline simulates.",
        disabled=(mode != "mock"),
    )
    if mode == "mock":
        st.caption(describe_scenario(scenario))

    mock_delay = st.checkbox(
        "Simulate API latency",
        value=settings.mock_delay_enabled,
        disabled=(mode != "mock"),
    )

    # ------------------------------------------------------------------
    # Stage under judgment
    # ------------------------------------------------------------------
    st.subheader("Stage")
    execution_id = st.text_input("Execution ID", value=settings.execution_id)
    stage_id = st.text_input("Stage ID", value=settings.stage_id)

    # ------------------------------------------------------------------
    # Integration overrides
    # ------------------------------------------------------------------
    st.subheader("Integration Status")

    integrations = [
        ("Pipeline API", "pipeline_api"),
        ("Operator identity", "operator"),
    ]

    for display_name, key in integrations:
        effective = settings.get_integration_mode(key)
        label = "mock" if effective == "mock" else "live"
        icon = "🟡" if label == "mock" else "🟢"
        st.write(f"{icon} **{display_name}** — {label}")

    # ------------------------------------------------------------------
    # Apply
    # ------------------------------------------------------------------
    st.divider()
    if st.button("Apply settings", type="primary"):
        updated = settings.model_copy(update={
            "approval_mode": mode,
            "mock_scenario": scenario,
            "mock_delay_enabled": mock_delay,
            "execution_id": execution_id,
            "stage_id": stage_id,
        })
        set_session_settings(updated)
        st.success("Settings applied.")
        st.rerun()
