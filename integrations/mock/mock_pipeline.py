"""Mock pipeline backend — permissions, executions and judgments from scenario fixtures."""

from __future__ import annotations

import logging

from app.config import Settings
from core.exceptions import IntegrationError
from core.models import (
    Application,
    Execution,
    JudgmentDecision,
    RoleGrantSet,
    Stage,
    StageStatus,
)
from integrations.base import ExecutionReader, JudgmentTransport, PermissionDirectory
from integrations.mock.base import MockBase

logger = logging.getLogger(__name__)

_DECISION_OUTCOMES: dict[JudgmentDecision, StageStatus] = {
    JudgmentDecision.CONTINUE: StageStatus.SUCCEEDED,
    JudgmentDecision.STOP: StageStatus.TERMINAL,
}


class MockPipeline(PermissionDirectory, JudgmentTransport, ExecutionReader, MockBase):
    provider_key = "pipeline"

    def __init__(self, settings: Settings) -> None:
        self._executions: dict[str, Execution] = {}
        self._submissions: list[dict] = []
        MockBase.__init__(self, settings)

    def reload_scenario(self) -> None:
        """Re-read the scenario, discarding judgments recorded so far."""
        super().reload_scenario()
        self._executions = {
            e["id"]: Execution.model_validate(e) for e in self._get("executions", [])
        }
        self._submissions.clear()

    @property
    def submissions(self) -> list[dict]:
        """Judgments recorded during this session, oldest first."""
        return list(self._submissions)

    async def get_application_permissions(self, application_name: str) -> RoleGrantSet | None:
        await self._simulate_delay()
        app = self._get("applications", {}).get(application_name)
        if not app or app.get("permissions") is None:
            return None
        return RoleGrantSet.from_permissions(app["permissions"])

    async def get_execution(self, execution_id: str) -> Execution:
        await self._simulate_delay()
        execution = self._executions.get(execution_id)
        if execution is None:
            raise IntegrationError("pipeline", f"Execution '{execution_id}' not found")
        return execution.model_copy(deep=True)

    async def submit_judgment(
        self,
        application: Application,
        execution: Execution,
        stage: Stage,
        decision: JudgmentDecision,
        selected_option: str | None,
        freeform_text: str | None,
    ) -> None:
        await self._simulate_delay()
        if self._get("fail_submissions", False):
            raise IntegrationError("pipeline", "Judgment could not be recorded")

        stored = self._executions.get(execution.id)
        target = stored.find_stage(stage.id) if stored else None
        if target is None:
            raise IntegrationError("pipeline", f"Stage '{stage.id}' not found in execution '{execution.id}'")

        target.context.judgment_status = decision.value
        target.status = _DECISION_OUTCOMES[decision]
        self._submissions.append({
            "application": application.name,
            "execution_id": execution.id,
            "stage_id": stage.id,
            "decision": decision.value,
            "judgment_input": selected_option,
            "judgment_freeform_input": freeform_text,
        })
        logger.info("Recorded mock judgment '%s' for stage %s", decision.value, stage.id)
