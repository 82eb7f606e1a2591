"""Operator identity taken from configuration (OPERATOR_NAME / OPERATOR_ROLES)."""

from __future__ import annotations

from app.config import Settings
from integrations.base import IdentityProvider


class ConfiguredOperatorIdentity(IdentityProvider):
    def __init__(self, settings: Settings) -> None:
        self._name = settings.operator_name
        self._roles = frozenset(settings.operator_roles)

    @property
    def operator_name(self) -> str:
        return self._name

    def get_authenticated_operator_roles(self) -> set[str]:
        return set(self._roles)
