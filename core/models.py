"""Core data models for the manual judgment gate."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class PermissionKind(str, Enum):
    READ = "READ"
    WRITE = "WRITE"
    EXECUTE = "EXECUTE"
    CREATE = "CREATE"


class StageStatus(str, Enum):
    NOT_STARTED = "NOT_STARTED"
    BUFFERED = "BUFFERED"
    RUNNING = "RUNNING"
    PAUSED = "PAUSED"
    SUSPENDED = "SUSPENDED"
    SUCCEEDED = "SUCCEEDED"
    FAILED_CONTINUE = "FAILED_CONTINUE"
    TERMINAL = "TERMINAL"
    CANCELED = "CANCELED"
    REDIRECT = "REDIRECT"
    STOPPED = "STOPPED"
    SKIPPED = "SKIPPED"

    @property
    def is_complete(self) -> bool:
        return self not in _INCOMPLETE_STATUSES


_INCOMPLETE_STATUSES = frozenset({
    StageStatus.NOT_STARTED,
    StageStatus.BUFFERED,
    StageStatus.RUNNING,
    StageStatus.PAUSED,
    StageStatus.SUSPENDED,
    StageStatus.REDIRECT,
})


class JudgmentDecision(str, Enum):
    CONTINUE = "continue"
    STOP = "stop"


class DecisionStatus(str, Enum):
    UNSET = "unset"
    CONTINUE = "continue"
    STOP = "stop"


# ---------------------------------------------------------------------------
# Permission and identity models
# ---------------------------------------------------------------------------


class RoleGrantSet(BaseModel):
    """Roles granted each permission kind on an application."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    read: frozenset[str] = Field(default_factory=frozenset, alias="READ")
    write: frozenset[str] = Field(default_factory=frozenset, alias="WRITE")
    execute: frozenset[str] = Field(default_factory=frozenset, alias="EXECUTE")
    create: frozenset[str] = Field(default_factory=frozenset, alias="CREATE")

    @field_validator("read", "write", "execute", "create", mode="before")
    @classmethod
    def _none_is_empty(cls, value: Any) -> Any:
        return () if value is None else value

    @classmethod
    def from_permissions(cls, permissions: dict[str, Any] | None) -> RoleGrantSet:
        """Build a grant set from a ``{"READ": [...], ...}`` mapping; ``None`` is empty."""
        return cls.model_validate(permissions or {})

    def roles_for(self, *kinds: PermissionKind) -> frozenset[str]:
        roles: frozenset[str] = frozenset()
        for kind in kinds:
            roles |= getattr(self, kind.value.lower())
        return roles


# ---------------------------------------------------------------------------
# Pipeline models
# ---------------------------------------------------------------------------


class JudgmentOption(BaseModel):
    value: str


class StageContext(BaseModel):
    """The subset of a manual judgment stage's context read by the gate.

    Keys arrive in the pipeline's camelCase form (``judgmentInputs``) but the
    snake_case field names are accepted too. Absent and ``null`` lists are
    treated as empty.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    instructions: str | None = None
    judgment_inputs: list[JudgmentOption] = Field(default_factory=list)
    judgment_freeform_inputs: list[JudgmentOption] = Field(default_factory=list)
    judgment_status: str | None = None
    selected_stage_roles: list[str] = Field(default_factory=list)
    stop_button_label: str | None = None
    continue_button_label: str | None = None

    @field_validator("judgment_inputs", "judgment_freeform_inputs", "selected_stage_roles", mode="before")
    @classmethod
    def _none_is_empty(cls, value: Any) -> Any:
        return [] if value is None else value


class Stage(BaseModel):
    id: str
    name: str = ""
    type: str = "manualJudgment"
    status: StageStatus = StageStatus.NOT_STARTED
    context: StageContext = Field(default_factory=StageContext)


class Execution(BaseModel):
    id: str
    application: str
    name: str = ""
    stages: list[Stage] = Field(default_factory=list)

    def find_stage(self, stage_id: str) -> Stage | None:
        return next((s for s in self.stages if s.id == stage_id), None)


class Application(BaseModel):
    name: str


# ---------------------------------------------------------------------------
# Gate state
# ---------------------------------------------------------------------------


class PendingInput(BaseModel):
    """The operator's unsubmitted answer."""

    selected_option: str | None = None
    freeform_text: str | None = None


class SubmissionState(BaseModel):
    submitting: bool = False
    error: bool = False


class GateState(BaseModel):
    """Everything a gate owns for the duration of one attachment."""

    role_grants: RoleGrantSet = Field(default_factory=RoleGrantSet)
    operator_roles: frozenset[str] = Field(default_factory=frozenset)
    pending: PendingInput = Field(default_factory=PendingInput)
    submission: SubmissionState = Field(default_factory=SubmissionState)
    decision: DecisionStatus = DecisionStatus.UNSET
    attached: bool = False


class GateView(BaseModel):
    """Data and predicates consumed by the presentation layer."""

    instructions: str | None = None
    options: list[str] = Field(default_factory=list)
    selected_option: str | None = None
    freeform_prompt: str | None = None
    freeform_text: str | None = None
    show_controls: bool = False
    controls_disabled: bool = True
    stop_label: str = "Stop"
    continue_label: str = "Continue"
    stop_busy: bool = False
    continue_busy: bool = False
    authorized: bool = False
    error_message: str | None = None
