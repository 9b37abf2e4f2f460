"""Route authorization policies.

A policy is a pure predicate over the caller's identity and the route's path
parameters. Routes declare the policy they need::

    @router.get("/{username}", dependencies=[Depends(require(ADMIN_OR_USER))])

and ``require`` turns a denial into a 401.
"""
from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Protocol

from fastapi import Depends, Request

from liftlog.api.deps import get_identity
from liftlog.core.errors import UnauthorizedError
from liftlog.core.security import Identity


class Policy(Protocol):
    def allows(self, identity: Identity | None, params: Mapping[str, str]) -> bool: ...


class LoggedIn:
    def allows(self, identity: Identity | None, params: Mapping[str, str]) -> bool:
        return identity is not None


class Admin:
    def allows(self, identity: Identity | None, params: Mapping[str, str]) -> bool:
        return identity is not None and identity.is_admin


@dataclass(frozen=True)
class AdminOrUser:
    """Admins, or the user named by the ``param`` path parameter."""

    param: str = "username"

    def allows(self, identity: Identity | None, params: Mapping[str, str]) -> bool:
        if identity is None:
            return False
        return identity.is_admin or identity.username == params.get(self.param)


@dataclass(frozen=True)
class AllOf:
    policies: tuple[Policy, ...]

    def allows(self, identity: Identity | None, params: Mapping[str, str]) -> bool:
        return all(policy.allows(identity, params) for policy in self.policies)


LOGGED_IN = LoggedIn()
ADMIN = Admin()
ADMIN_OR_USER = AdminOrUser()


def require(policy: Policy) -> Callable[..., Identity | None]:
    def dependency(
        request: Request,
        identity: Identity | None = Depends(get_identity),
    ) -> Identity | None:
        if not policy.allows(identity, request.path_params):
            raise UnauthorizedError()
        return identity

    return dependency
