"""HTTP client for the pipeline API — permissions, executions and judgments."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import httpx

from app.config import Settings
from core.exceptions import ConfigurationError, IntegrationError
from core.models import (
    Application,
    Execution,
    JudgmentDecision,
    RoleGrantSet,
    Stage,
    StageStatus,
)
from integrations.base import ExecutionReader, JudgmentTransport, PermissionDirectory

logger = logging.getLogger(__name__)

PROVIDER = "pipeline_api"


def judgment_landed(stage: Stage | None, decision: JudgmentDecision, previous_status: StageStatus) -> bool:
    """Return True once the backend reflects a judgment on the stage.

    Either the stage carries the decision or it has moved off the status it
    had when the judgment was sent.
    """
    if stage is None:
        return False
    return stage.context.judgment_status == decision.value or stage.status != previous_status


class PipelineApiClient(PermissionDirectory, JudgmentTransport, ExecutionReader):
    """Talks to the pipeline API over HTTP.

    The underlying ``httpx.AsyncClient`` is created lazily; pass one in to
    share a connection pool or to stub the transport in tests.
    """

    def __init__(self, settings: Settings, http_client: httpx.AsyncClient | None = None) -> None:
        if http_client is None and not settings.pipeline_api_url:
            raise ConfigurationError("PIPELINE_API_URL must be set to use the pipeline API")
        self._settings = settings
        self._http_client = http_client

    def _client(self) -> httpx.AsyncClient:
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(
                base_url=self._settings.pipeline_api_url,
                timeout=httpx.Timeout(self._settings.pipeline_api_timeout_seconds),
            )
        return self._http_client

    async def aclose(self) -> None:
        if self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None

    async def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        try:
            response = await self._client().request(method, path, **kwargs)
        except httpx.TimeoutException as e:
            raise IntegrationError(PROVIDER, f"{method} {path} timed out") from e
        except httpx.HTTPError as e:
            raise IntegrationError(PROVIDER, f"{method} {path} failed: {e}") from e
        return response

    @staticmethod
    def _raise_for_status(response: httpx.Response) -> None:
        if response.is_error:
            raise IntegrationError(
                PROVIDER,
                f"{response.request.method} {response.request.url.path} "
                f"returned HTTP {response.status_code}",
            )

    # ------------------------------------------------------------------
    # PermissionDirectory
    # ------------------------------------------------------------------

    async def get_application_permissions(self, application_name: str) -> RoleGrantSet | None:
        response = await self._request("GET", f"/applications/{application_name}")
        if response.status_code == httpx.codes.NOT_FOUND:
            return None
        self._raise_for_status(response)
        attributes = response.json().get("attributes") or {}
        permissions = attributes.get("permissions")
        if permissions is None:
            return None
        return RoleGrantSet.from_permissions(permissions)

    # ------------------------------------------------------------------
    # ExecutionReader
    # ------------------------------------------------------------------

    async def get_execution(self, execution_id: str) -> Execution:
        response = await self._request("GET", f"/pipelines/{execution_id}")
        self._raise_for_status(response)
        return Execution.model_validate(response.json())

    # ------------------------------------------------------------------
    # JudgmentTransport
    # ------------------------------------------------------------------

    async def submit_judgment(
        self,
        application: Application,
        execution: Execution,
        stage: Stage,
        decision: JudgmentDecision,
        selected_option: str | None,
        freeform_text: str | None,
    ) -> None:
        """Record the judgment, then wait until the execution reflects it."""
        body = {
            "judgmentStatus": decision.value,
            "judgmentInput": selected_option,
            "judgmentFreeformInput": freeform_text,
        }
        response = await self._request(
            "PATCH", f"/pipelines/{execution.id}/stages/{stage.id}", json=body
        )
        self._raise_for_status(response)
        logger.info(
            "Judgment '%s' sent for %s stage %s (execution %s)",
            decision.value, application.name, stage.id, execution.id,
        )
        await self._wait_for_judgment(execution.id, stage.id, decision, stage.status)

    async def _wait_for_judgment(
        self, execution_id: str, stage_id: str, decision: JudgmentDecision, previous_status: StageStatus
    ) -> None:
        attempts = self._settings.judgment_poll_max_attempts
        for _ in range(attempts):
            execution = await self.get_execution(execution_id)
            if judgment_landed(execution.find_stage(stage_id), decision, previous_status):
                return
            await asyncio.sleep(self._settings.judgment_poll_interval_seconds)
        raise IntegrationError(
            PROVIDER,
            f"Stage {stage_id} did not reflect judgment '{decision.value}' after {attempts} checks",
        )
