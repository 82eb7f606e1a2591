"""Mock identity provider — returns the scenario's operator roles."""

from __future__ import annotations

from app.config import Settings
from integrations.base import IdentityProvider
from integrations.mock.base import MockBase


class MockIdentityProvider(IdentityProvider, MockBase):
    provider_key = "identity"

    def __init__(self, settings: Settings) -> None:
        MockBase.__init__(self, settings)

    @property
    def operator_name(self) -> str:
        return self._get("name", "anonymous")

    def get_authenticated_operator_roles(self) -> set[str]:
        return set(self._get("roles") or [])
