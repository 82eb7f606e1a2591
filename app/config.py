"""Application configuration loaded from environment variables and .env file."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Global mode
    approval_mode: str = Field(default="mock", description="Global mode: 'mock' or 'live'")

    # Mock settings
    mock_scenario: str = Field(default="release_managers")
    mock_delay_enabled: bool = Field(default=True)

    # Pipeline API (permissions, executions, judgments)
    pipeline_api_mode: str = Field(default="")
    pipeline_api_url: str = Field(default="http://localhost:8084")
    pipeline_api_timeout_seconds: float = Field(default=30.0)
    judgment_poll_interval_seconds: float = Field(default=1.0)
    judgment_poll_max_attempts: int = Field(default=30)

    # Operator identity
    operator_mode: str = Field(default="")
    operator_name: str = Field(default="anonymous")
    operator_roles: list[str] = Field(default_factory=list)

    # Stage shown by the UI
    execution_id: str = Field(default="01HEXEC0000000000000000001")
    stage_id: str = Field(default="manual-judgment-1")

    def get_integration_mode(self, integration: str) -> str:
        """Return the effective mode for a given integration.

        Per-integration overrides take precedence over the global approval_mode.
        """
        override = getattr(self, f"{integration}_mode", "")
        return override if override else self.approval_mode

    @property
    def available_scenarios(self) -> list[str]:
        return [
            "release_managers",
            "qa_operator",
            "unrestricted",
            "permissions_unavailable",
            "submission_failure",
        ]


def get_settings() -> Settings:
    """Create and return the application settings singleton."""
    return Settings()
