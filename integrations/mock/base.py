"""Scenario fixtures and simulated latency shared by the mock providers."""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Any

from app.config import Settings

SCENARIOS_DIR = Path(__file__).resolve().parent / "fixtures" / "scenarios"

MOCK_DELAYS: dict[str, float] = {
    "pipeline": 0.3,
    "identity": 0.0,
}


def load_scenario(name: str) -> dict[str, Any]:
    """Return the full scenario fixture, or an empty dict if there is none."""
    path = SCENARIOS_DIR / f"{name}.json"
    if not path.exists():
        return {}
    with open(path, encoding="utf-8") as f:
        return json.load(f)


def describe_scenario(name: str) -> str:
    return load_scenario(name).get("description", "")


class MockBase:
    """Base class for mock providers.

    Each provider reads its own section (``provider_key``) of the active
    scenario file.
    """

    provider_key: str = ""

    def __init__(self, settings: Settings) -> None:
        self._settings = settings
        self._scenario_data: dict[str, Any] = {}
        self.reload_scenario()

    def reload_scenario(self) -> None:
        """Re-read the active scenario (e.g. after the user switches scenarios)."""
        self._scenario_data = load_scenario(self._settings.mock_scenario).get(self.provider_key, {})

    async def _simulate_delay(self) -> None:
        if self._settings.mock_delay_enabled:
            await asyncio.sleep(MOCK_DELAYS.get(self.provider_key, 0.2))

    def _get(self, key: str, default: Any = None) -> Any:
        return self._scenario_data.get(key, default)
