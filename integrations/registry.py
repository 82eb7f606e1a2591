"""Integration registry and factory for resolving providers based on configuration."""

from __future__ import annotations

from typing import TYPE_CHECKING

from core.exceptions import ProviderNotFoundError

if TYPE_CHECKING:
    from app.config import Settings
    from integrations.base import (
        ExecutionReader,
        IdentityProvider,
        JudgmentTransport,
        PermissionDirectory,
    )

# Maps category → mode → import path (module, class_name).
# Providers are imported lazily to avoid loading unused dependencies.
PROVIDER_MAP: dict[str, dict[str, tuple[str, str]]] = {
    "permissions": {
        "mock": ("integrations.mock.mock_pipeline", "MockPipeline"),
        "pipeline_api": ("integrations.providers.pipeline_api.client", "PipelineApiClient"),
    },
    "identity": {
        "mock": ("integrations.mock.mock_identity", "MockIdentityProvider"),
        "operator": ("integrations.providers.operator.identity", "ConfiguredOperatorIdentity"),
    },
    "judgment": {
        "mock": ("integrations.mock.mock_pipeline", "MockPipeline"),
        "pipeline_api": ("integrations.providers.pipeline_api.client", "PipelineApiClient"),
    },
    "executions": {
        "mock": ("integrations.mock.mock_pipeline", "MockPipeline"),
        "pipeline_api": ("integrations.providers.pipeline_api.client", "PipelineApiClient"),
    },
}

# Maps integration mode keywords to the categories they serve.
_MODE_TO_CATEGORIES: dict[str, tuple[str, ...]] = {
    "pipeline_api": ("permissions", "judgment", "executions"),
    "operator": ("identity",),
}


def _import_class(module_path: str, class_name: str) -> type:
    """Lazily import a provider class by its module path and class name."""
    import importlib

    module = importlib.import_module(module_path)
    return getattr(module, class_name)


class IntegrationRegistry:
    """Resolves and caches integration providers based on application configuration."""

    def __init__(self, settings: Settings) -> None:
        self._settings = settings
        self._cache: dict[str, object] = {}
        # One instance per provider class, shared by the categories it serves.
        self._instances: dict[tuple[str, str], object] = {}

    def _resolve_mode(self, category: str) -> str:
        """Determine the effective mode for a category.

        Checks for per-integration overrides (e.g. PIPELINE_API_MODE=live) before
        falling back to the global APPROVAL_MODE.
        """
        for integration_key, categories in _MODE_TO_CATEGORIES.items():
            if category in categories:
                override = self._settings.get_integration_mode(integration_key)
                if override and override != "mock":
                    return integration_key
        return "mock"

    def get_provider(
        self, category: str
    ) -> PermissionDirectory | IdentityProvider | JudgmentTransport | ExecutionReader:
        """Return the provider instance for the given category.

        Providers are instantiated once and cached for the lifetime of the registry.
        """
        if category in self._cache:
            return self._cache[category]  # type: ignore[return-value]

        if category not in PROVIDER_MAP:
            raise ProviderNotFoundError(category)

        mode = self._resolve_mode(category)
        providers = PROVIDER_MAP[category]

        if mode not in providers:
            raise ProviderNotFoundError(category, mode)

        key = providers[mode]
        instance = self._instances.get(key)
        if instance is None:
            instance = _import_class(*key)(self._settings)
            self._instances[key] = instance
        self._cache[category] = instance
        return instance  # type: ignore[return-value]

    def reset(self) -> None:
        """Clear the provider cache, forcing re-resolution on next access."""
        self._cache.clear()
        self._instances.clear()

    async def aclose(self) -> None:
        """Close providers holding connections, then clear the cache."""
        for instance in self._instances.values():
            close = getattr(instance, "aclose", None)
            if close is not None:
                await close()
        self.reset()
