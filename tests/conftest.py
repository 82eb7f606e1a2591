"""Shared test fixtures for the judgment gate test suite."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from app.config import Settings
from core.models import (
    Application,
    Execution,
    JudgmentOption,
    RoleGrantSet,
    Stage,
    StageContext,
    StageStatus,
)
from integrations.registry import IntegrationRegistry


@pytest.fixture
def mock_settings() -> Settings:
    """Return a Settings instance configured for mock mode."""
    return Settings(
        approval_mode="mock",
        mock_scenario="release_managers",
        mock_delay_enabled=False,
    )


@pytest.fixture
def release_grants() -> RoleGrantSet:
    return RoleGrantSet.from_permissions({
        "READ": ["release-managers", "qa"],
        "WRITE": ["release-managers"],
    })


@pytest.fixture
def sample_application() -> Application:
    return Application(name="deployments")


@pytest.fixture
def restricted_stage() -> Stage:
    return Stage(
        id="mj-1",
        name="Approve rollout",
        status=StageStatus.RUNNING,
        context=StageContext(selected_stage_roles=["release-managers"]),
    )


@pytest.fixture
def stage_with_inputs() -> Stage:
    return Stage(
        id="mj-1",
        name="Approve rollout",
        status=StageStatus.RUNNING,
        context=StageContext(
            instructions="Check the canary.",
            judgment_inputs=[JudgmentOption(value="proceed"), JudgmentOption(value="hold")],
            judgment_freeform_inputs=[JudgmentOption(value="Change ticket")],
            selected_stage_roles=["release-managers"],
        ),
    )


@pytest.fixture
def sample_execution(restricted_stage) -> Execution:
    return Execution(id="exec-1", application="deployments", stages=[restricted_stage])


@pytest.fixture
def permissions():
    directory = MagicMock()
    directory.get_application_permissions = AsyncMock(return_value=None)
    return directory


@pytest.fixture
def identity():
    provider = MagicMock()
    provider.get_authenticated_operator_roles = MagicMock(return_value=set())
    return provider


@pytest.fixture
def transport():
    judgment = MagicMock()
    judgment.submit_judgment = AsyncMock(return_value=None)
    return judgment


@pytest.fixture
def mock_registry(permissions, identity, transport):
    registry = MagicMock(spec=IntegrationRegistry)
    registry.get_provider.side_effect = lambda category: {
        "permissions": permissions,
        "identity": identity,
        "judgment": transport,
    }[category]
    return registry
