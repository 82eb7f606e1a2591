"""Manual judgment page — shows the configured stage and records the operator's decision."""

import logging

import streamlit as st

from app.components.judgment_panel import render_judgment_panel
from app.state.session import (
    get_gate,
    get_registry,
    get_session_settings,
    run_async,
    set_gate,
)
from core.exceptions import JudgmentGateError
from core.judgment_gate import JudgmentGate
from core.models import Application

logger = logging.getLogger(__name__)


def _open_gate() -> JudgmentGate | None:
    settings = get_session_settings()
    registry = get_registry()
    reader = registry.get_provider("executions")
    try:
        execution = run_async(reader.get_execution(settings.execution_id))
    except JudgmentGateError as e:
        st.error(f"Could not load execution {settings.execution_id}: {e}")
        return None

    stage = execution.find_stage(settings.stage_id)
    if stage is None:
        st.error(f"Stage {settings.stage_id} not found in execution {execution.id}.")
        return None

    gate = JudgmentGate(registry, Application(name=execution.application), execution, stage)
    run_async(gate.attach())
    set_gate(gate)
    return gate


def _refresh_stage(gate: JudgmentGate) -> None:
    reader = get_registry().get_provider("executions")
    try:
        execution = run_async(reader.get_execution(get_session_settings().execution_id))
    except JudgmentGateError as e:
        logger.warning("Stage refresh failed: %s", e)
        return
    stage = execution.find_stage(gate.stage.id)
    if stage is not None:
        gate.update_stage(stage)


def render() -> None:
    st.header("Manual Judgment")

    gate = get_gate() or _open_gate()
    if gate is None:
        return

    operator = get_registry().get_provider("identity").operator_name
    st.caption(f"Signed in as **{operator}**")

    stage = gate.stage
    col1, col2 = st.columns(2)
    col1.metric("Stage", stage.name or stage.id)
    col2.metric("Status", stage.status.value)

    decision = render_judgment_panel(gate)
    if decision is not None:
        if run_async(gate.provide_judgment(decision)):
            _refresh_stage(gate)
        st.rerun()

    with st.sidebar:
        if st.button("Refresh stage"):
            _refresh_stage(gate)
            st.rerun()
