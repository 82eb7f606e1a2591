"""Role-based authorization for manual judgment stages."""

from __future__ import annotations

from collections.abc import Iterable

from core.models import PermissionKind, RoleGrantSet

# Permission kinds that let a designated judge act. READ is not one of them.
MUTATING_PERMISSIONS: tuple[PermissionKind, ...] = (
    PermissionKind.WRITE,
    PermissionKind.EXECUTE,
    PermissionKind.CREATE,
)


def is_authorized(
    stage_roles: Iterable[str],
    grants: RoleGrantSet,
    operator_roles: Iterable[str],
    permissions: Iterable[PermissionKind] = MUTATING_PERMISSIONS,
) -> bool:
    """Return True if the operator may submit a judgment for the stage.

    A stage without role restrictions accepts any operator. Otherwise the
    operator needs at least one of the stage's roles that is also granted one
    of *permissions* on the application.
    """
    stage_roles = set(stage_roles)
    if not stage_roles:
        return True
    judges = stage_roles.intersection(operator_roles)
    return not judges.isdisjoint(grants.roles_for(*permissions))


class AuthorizationEvaluator:
    """Evaluates whether an operator may act on a manual judgment stage.

    Usage:
        evaluator = AuthorizationEvaluator()
        evaluator.is_authorized(stage.context.selected_stage_roles, grants, operator_roles)
    """

    def __init__(self, permissions: Iterable[PermissionKind] = MUTATING_PERMISSIONS) -> None:
        self._permissions = tuple(permissions)

    @property
    def permissions(self) -> tuple[PermissionKind, ...]:
        return self._permissions

    def is_authorized(
        self,
        stage_roles: Iterable[str],
        grants: RoleGrantSet,
        operator_roles: Iterable[str],
    ) -> bool:
        return is_authorized(stage_roles, grants, operator_roles, self._permissions)

    def designated_judges(self, stage_roles: Iterable[str], operator_roles: Iterable[str]) -> set[str]:
        """Return the operator's roles that the stage lists as judges."""
        return set(stage_roles).intersection(operator_roles)

    def qualifying_roles(
        self,
        stage_roles: Iterable[str],
        grants: RoleGrantSet,
        operator_roles: Iterable[str],
    ) -> set[str]:
        """Return the operator's judge roles that also hold a mutating grant.

        Empty for unrestricted stages even though those are authorized.
        """
        return self.designated_judges(stage_roles, operator_roles) & grants.roles_for(*self._permissions)
