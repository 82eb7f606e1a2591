"""Abstract base classes for the judgment gate's external collaborators."""

from __future__ import annotations

from abc import ABC, abstractmethod

from core.models import Application, Execution, JudgmentDecision, RoleGrantSet, Stage


class PermissionDirectory(ABC):
    """Interface for looking up role grants on an application."""

    @abstractmethod
    async def get_application_permissions(self, application_name: str) -> RoleGrantSet | None:
        ...


class IdentityProvider(ABC):
    """Interface for the currently authenticated operator."""

    @property
    @abstractmethod
    def operator_name(self) -> str:
        ...

    @abstractmethod
    def get_authenticated_operator_roles(self) -> set[str]:
        ...


class JudgmentTransport(ABC):
    """Interface for recording a judgment against the pipeline backend."""

    @abstractmethod
    async def submit_judgment(
        self,
        application: Application,
        execution: Execution,
        stage: Stage,
        decision: JudgmentDecision,
        selected_option: str | None,
        freeform_text: str | None,
    ) -> None:
        ...


class ExecutionReader(ABC):
    """Interface for reading the current state of a pipeline execution."""

    @abstractmethod
    async def get_execution(self, execution_id: str) -> Execution:
        ...
