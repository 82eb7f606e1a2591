"""Streamlit session state management."""

from __future__ import annotations

import asyncio
from collections.abc import Coroutine
from typing import Any, TypeVar

import streamlit as st

from app.config import Settings, get_settings
from core.judgment_gate import JudgmentGate
from integrations.registry import IntegrationRegistry

T = TypeVar("T")

# Keys used in st.session_state
_SETTINGS_KEY = "app_settings"
_REGISTRY_KEY = "integration_registry"
_GATE_KEY = "judgment_gate"
_LOOP_KEY = "event_loop"


def init_session_state() -> None:
    """Initialize all session state keys with defaults if not already set."""
    if _SETTINGS_KEY not in st.session_state:
        st.session_state[_SETTINGS_KEY] = get_settings()
    if _REGISTRY_KEY not in st.session_state:
        st.session_state[_REGISTRY_KEY] = IntegrationRegistry(st.session_state[_SETTINGS_KEY])
    if _GATE_KEY not in st.session_state:
        st.session_state[_GATE_KEY] = None
    if _LOOP_KEY not in st.session_state:
        st.session_state[_LOOP_KEY] = asyncio.new_event_loop()


def run_async(coro: Coroutine[Any, Any, T]) -> T:
    """Run a coroutine on the session's event loop.

    One loop per session so that providers holding loop-bound clients keep
    working across reruns.
    """
    return st.session_state[_LOOP_KEY].run_until_complete(coro)


def get_session_settings() -> Settings:
    """Return the current Settings from session state."""
    return st.session_state[_SETTINGS_KEY]


def set_session_settings(settings: Settings) -> None:
    """Replace the settings and drop everything derived from them.

    The previous registry is closed on the session loop before it is replaced.
    """
    set_gate(None)
    previous = st.session_state.get(_REGISTRY_KEY)
    if previous is not None:
        run_async(previous.aclose())
    st.session_state[_SETTINGS_KEY] = settings
    st.session_state[_REGISTRY_KEY] = IntegrationRegistry(settings)


def get_registry() -> IntegrationRegistry:
    return st.session_state[_REGISTRY_KEY]


def get_gate() -> JudgmentGate | None:
    """Return the gate attached in this session, if any."""
    return st.session_state[_GATE_KEY]


def set_gate(gate: JudgmentGate | None) -> None:
    """Replace the session's gate, detaching the previous one."""
    previous = st.session_state.get(_GATE_KEY)
    if previous is not None and previous is not gate:
        previous.detach()
    st.session_state[_GATE_KEY] = gate
