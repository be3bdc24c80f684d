"""Domain service: Authorization Gate.

Decides who may void a transaction.  Managers void directly; front-desk
staff need a manager code, checked by whichever ``AuthorizationPolicy``
the composition root supplies.
"""

from __future__ import annotations

import logging
import secrets
from abc import ABC, abstractmethod
from enum import Enum

from hpos.domain.exceptions import AuthorizationError, ConfigurationError

logger = logging.getLogger("hpos.auth")

MANAGER_CODE_LENGTH = 4


class Role(Enum):
    MANAGER = "manager"
    RECEPTIONIST = "receptionist"


class AuthorizationPolicy(ABC):

    @abstractmethod
    def verify(self, code: str) -> bool:
        """Return True if *code* authorizes a manager-tier action."""


class SharedCodePolicy(AuthorizationPolicy):
    """A fixed shared secret compared verbatim."""

    def __init__(self, code: str) -> None:
        if len(code) != MANAGER_CODE_LENGTH:
            raise ConfigurationError(
                f"Manager code must be exactly {MANAGER_CODE_LENGTH} characters"
            )
        self._code = code

    def verify(self, code: str) -> bool:
        return secrets.compare_digest(code.encode("utf-8"), self._code.encode("utf-8"))


class AuthorizationGate:

    def __init__(self, policy: AuthorizationPolicy) -> None:
        self._policy = policy

    def can_void_directly(self, role: Role) -> bool:
        return role is Role.MANAGER

    def verify_manager_code(self, candidate: str | None) -> bool:
        if not candidate:
            return False
        return self._policy.verify(candidate)

    def authorize_void(self, role: Role, manager_code: str | None = None) -> None:
        """Raise ``AuthorizationError`` unless *role* may void.

        The error never says why the code was rejected.
        """
        if self.can_void_directly(role):
            return
        if not self.verify_manager_code(manager_code):
            logger.warning("Void rejected: invalid manager code from %s", role.value)
            raise AuthorizationError()
