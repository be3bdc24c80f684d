"""Tests for the AuthorizationGate domain service."""

import pytest

from hpos.domain.exceptions import AuthorizationError, ConfigurationError
from hpos.domain.service.authorization import (
    AuthorizationGate,
    AuthorizationPolicy,
    Role,
    SharedCodePolicy,
)


@pytest.fixture
def gate() -> AuthorizationGate:
    return AuthorizationGate(SharedCodePolicy("1234"))


class TestAuthorizationGate:

    def test_manager_voids_directly(self, gate):
        assert gate.can_void_directly(Role.MANAGER)
        gate.authorize_void(Role.MANAGER)

    def test_receptionist_needs_code(self, gate):
        assert not gate.can_void_directly(Role.RECEPTIONIST)

    def test_correct_code(self, gate):
        assert gate.verify_manager_code("1234")
        gate.authorize_void(Role.RECEPTIONIST, "1234")

    @pytest.mark.parametrize("code", ["0000", "", None, "12345", "123"])
    def test_wrong_code(self, gate, code):
        assert not gate.verify_manager_code(code)
        with pytest.raises(AuthorizationError, match="Invalid manager code"):
            gate.authorize_void(Role.RECEPTIONIST, code)

    def test_policy_is_pluggable(self):
        class AllowNone(AuthorizationPolicy):
            def verify(self, code: str) -> bool:
                return False

        gate = AuthorizationGate(AllowNone())
        with pytest.raises(AuthorizationError):
            gate.authorize_void(Role.RECEPTIONIST, "1234")
        gate.authorize_void(Role.MANAGER)


class TestSharedCodePolicy:

    @pytest.mark.parametrize("code", ["", "123", "12345"])
    def test_code_must_be_four_characters(self, code):
        with pytest.raises(ConfigurationError):
            SharedCodePolicy(code)
