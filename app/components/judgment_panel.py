"""Manual judgment panel: instructions, inputs and the stop/continue controls."""

from __future__ import annotations

import streamlit as st

from core.judgment_gate import JudgmentGate
from core.models import JudgmentDecision

_BUSY_PREFIX = "⏳ "


def _label(text: str, busy: bool) -> str:
    return f"{_BUSY_PREFIX}{text}" if busy else text


def render_judgment_panel(gate: JudgmentGate) -> JudgmentDecision | None:
    """Render the gate for its stage. Returns the decision clicked, or None."""
    stage_id = gate.stage.id
    view = gate.view()

    if view.instructions:
        st.markdown("**Instructions**")
        st.markdown(view.instructions)

    if view.show_controls:
        if view.options:
            st.markdown("**Judgment Input**")
            index = view.options.index(view.selected_option) if view.selected_option else None
            choice = st.selectbox(
                "Judgment Input",
                view.options,
                index=index,
                placeholder="Select...",
                label_visibility="collapsed",
                key=f"judgment_input_{stage_id}",
            )
            if choice is not None and choice != view.selected_option:
                gate.select_option(choice)

        if view.freeform_prompt:
            st.markdown(f"**{view.freeform_prompt}**")
            text = st.text_input(
                view.freeform_prompt,
                value=view.freeform_text or "",
                label_visibility="collapsed",
                key=f"judgment_freeform_{stage_id}",
            )
            gate.set_freeform_text(text)

        # Inputs may have changed above
        view = gate.view()
        col1, col2 = st.columns(2)
        if col1.button(
            _label(view.stop_label, view.stop_busy),
            disabled=view.controls_disabled,
            key=f"stop_{stage_id}",
        ):
            return JudgmentDecision.STOP
        if col2.button(
            _label(view.continue_label, view.continue_busy),
            disabled=view.controls_disabled,
            type="primary",
            key=f"continue_{stage_id}",
        ):
            return JudgmentDecision.CONTINUE

    if view.error_message:
        st.error(view.error_message)
    return None
