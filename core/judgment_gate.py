"""JudgmentGate — authorization, input gating and submission for one manual judgment stage."""

from __future__ import annotations

import logging

from core.authorization import AuthorizationEvaluator
from core.exceptions import JudgmentInputError, StageMismatchError
from core.models import (
    Application,
    DecisionStatus,
    Execution,
    GateState,
    GateView,
    JudgmentDecision,
    PendingInput,
    Stage,
    StageStatus,
    SubmissionState,
)
from integrations.registry import IntegrationRegistry

logger = logging.getLogger(__name__)

SUBMISSION_ERROR_MESSAGE = "There was an error recording your decision. Please try again."

DEFAULT_STOP_LABEL = "Stop"
DEFAULT_CONTINUE_LABEL = "Continue"

# Statuses for which decision controls are never offered.
_HIDDEN_STATUSES = frozenset({StageStatus.SKIPPED, StageStatus.SUCCEEDED})


class JudgmentGate:
    """Decision gate attached to a single manual judgment stage.

    Lifecycle: attach → (edit inputs → provide_judgment)* → update_stage … → detach

    All mutation happens on the caller's event loop. Results of calls that
    complete after ``detach()`` are dropped.
    """

    def __init__(
        self,
        registry: IntegrationRegistry,
        application: Application,
        execution: Execution,
        stage: Stage,
        evaluator: AuthorizationEvaluator | None = None,
    ) -> None:
        self._registry = registry
        self._application = application
        self._execution = execution
        self._stage = stage
        self._evaluator = evaluator or AuthorizationEvaluator()
        self._state = GateState()
        # Bumped on every detach so late completions can tell they are stale.
        self._attachment = 0

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def stage(self) -> Stage:
        return self._stage

    @property
    def state(self) -> GateState:
        return self._state

    @property
    def attached(self) -> bool:
        return self._state.attached

    def _is_current(self, attachment: int) -> bool:
        return self._state.attached and attachment == self._attachment

    # ------------------------------------------------------------------
    # Attachment
    # ------------------------------------------------------------------

    async def attach(self) -> None:
        """Load operator roles and application role grants, once.

        Neither load is retried. A missing or failed lookup leaves the grants
        or the operator roles empty.
        """
        if self._state.attached:
            return
        self._state = GateState(attached=True)
        attachment = self._attachment

        self._load_operator_roles()
        await self._load_role_grants(attachment)
        if self._is_current(attachment):
            logger.info(
                "Attached to stage %s: authorized=%s qualifying_roles=%s",
                self._stage.id,
                self.is_authorized(),
                sorted(self._evaluator.qualifying_roles(
                    self._stage.context.selected_stage_roles,
                    self._state.role_grants,
                    self._state.operator_roles,
                )),
            )

    def _load_operator_roles(self) -> None:
        try:
            identity = self._registry.get_provider("identity")
            roles = identity.get_authenticated_operator_roles()
        except Exception as e:
            logger.warning("Failed to load operator roles for stage %s: %s", self._stage.id, e)
            return
        self._state.operator_roles = frozenset(roles or ())

    async def _load_role_grants(self, attachment: int) -> None:
        application_name = self._execution.application
        try:
            directory = self._registry.get_provider("permissions")
            grants = await directory.get_application_permissions(application_name)
        except Exception as e:
            logger.warning("Failed to load permissions for %s: %s", application_name, e)
            return

        if not self._is_current(attachment):
            return
        if grants is None:
            logger.warning("No permissions found for %s; treating grants as empty", application_name)
            return
        self._state.role_grants = grants

    def detach(self) -> None:
        """Discard pending input and submission state."""
        self._attachment += 1
        self._state = GateState()

    # ------------------------------------------------------------------
    # Operator input
    # ------------------------------------------------------------------

    def offered_options(self) -> list[str]:
        return [o.value for o in self._stage.context.judgment_inputs]

    def freeform_prompt(self) -> str | None:
        freeform_inputs = self._stage.context.judgment_freeform_inputs
        return freeform_inputs[0].value if freeform_inputs else None

    def select_option(self, value: str) -> None:
        offered = self.offered_options()
        if value not in offered:
            raise JudgmentInputError(value, offered)
        self._state.pending.selected_option = value

    def set_freeform_text(self, text: str | None) -> None:
        self._state.pending.freeform_text = text

    # ------------------------------------------------------------------
    # Predicates
    # ------------------------------------------------------------------

    def is_authorized(self) -> bool:
        """Return whether the operator may judge this stage, from current state."""
        return self._evaluator.is_authorized(
            self._stage.context.selected_stage_roles,
            self._state.role_grants,
            self._state.operator_roles,
        )

    def missing_required_input(self) -> bool:
        context = self._stage.context
        pending = self._state.pending
        if context.judgment_inputs and not pending.selected_option:
            return True
        return bool(context.judgment_freeform_inputs) and not pending.freeform_text

    def controls_disabled(self) -> bool:
        """Shared enablement rule for both the stop and the continue control."""
        return (
            not self.is_authorized()
            or self._state.submission.submitting
            or bool(self._stage.context.judgment_status)
            or self.missing_required_input()
        )

    def show_controls(self) -> bool:
        status = self._stage.status
        if status in _HIDDEN_STATUSES:
            return False
        return not self._stage.context.judgment_status or status == StageStatus.RUNNING

    def is_submitting(self, decision: JudgmentDecision | str) -> bool:
        """Return True while *decision* is in flight or already recorded on the stage."""
        decision = JudgmentDecision(decision)
        if self._stage.context.judgment_status == decision.value:
            return True
        return self._state.submission.submitting and self._state.decision.value == decision.value

    # ------------------------------------------------------------------
    # Submission
    # ------------------------------------------------------------------

    async def provide_judgment(self, decision: JudgmentDecision | str) -> bool:
        """Submit *decision* for the stage.

        Returns False without calling the transport when the controls are
        unavailable (detached, hidden, disabled or already submitting) and
        when the transport rejects the submission. A rejection leaves the gate
        idle with ``error`` set so the operator can retry.
        """
        decision = JudgmentDecision(decision)
        if not self._state.attached or not self.show_controls() or self.controls_disabled():
            logger.debug("Ignoring '%s' for stage %s: controls unavailable", decision.value, self._stage.id)
            return False

        transport = self._registry.get_provider("judgment")
        attachment = self._attachment
        pending = self._state.pending.model_copy()

        self._state.submission = SubmissionState(submitting=True, error=False)
        self._state.decision = DecisionStatus(decision.value)
        logger.info("Submitting judgment '%s' for stage %s", decision.value, self._stage.id)

        try:
            await transport.submit_judgment(
                self._application,
                self._execution,
                self._stage,
                decision,
                pending.selected_option,
                pending.freeform_text,
            )
        except Exception as e:
            if self._is_current(attachment):
                logger.warning("Judgment '%s' for stage %s failed: %s", decision.value, self._stage.id, e)
                self._state.submission = SubmissionState(submitting=False, error=True)
                self._state.decision = DecisionStatus.UNSET
            return False
        return True

    def update_stage(self, stage: Stage) -> None:
        """Apply a refreshed copy of the stage from the pipeline.

        A refresh into a completed status returns the gate to idle.
        """
        if stage.id != self._stage.id:
            raise StageMismatchError(self._stage.id, stage.id)
        self._stage = stage
        if self._state.attached and stage.status.is_complete:
            self._state.submission = SubmissionState()
            self._state.decision = DecisionStatus.UNSET
        logger.info(
            "Stage %s refreshed: status=%s judgment=%s",
            stage.id, stage.status.value, stage.context.judgment_status,
        )

    # ------------------------------------------------------------------
    # Presentation
    # ------------------------------------------------------------------

    def view(self) -> GateView:
        context = self._stage.context
        pending: PendingInput = self._state.pending
        return GateView(
            instructions=context.instructions or None,
            options=self.offered_options(),
            selected_option=pending.selected_option,
            freeform_prompt=self.freeform_prompt(),
            freeform_text=pending.freeform_text,
            show_controls=self.show_controls(),
            controls_disabled=self.controls_disabled(),
            stop_label=context.stop_button_label or DEFAULT_STOP_LABEL,
            continue_label=context.continue_button_label or DEFAULT_CONTINUE_LABEL,
            stop_busy=self.is_submitting(JudgmentDecision.STOP),
            continue_busy=self.is_submitting(JudgmentDecision.CONTINUE),
            authorized=self.is_authorized(),
            error_message=SUBMISSION_ERROR_MESSAGE if self._state.submission.error else None,
        )
