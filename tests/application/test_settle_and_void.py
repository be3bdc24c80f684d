"""Integration tests for settling and voiding transactions."""

from datetime import timedelta

import pytest

from hpos.application.settle_transaction import SettleTransactionHandler
from hpos.application.void_transaction import VoidTransactionHandler
from hpos.domain.exceptions import (
    AuthorizationError,
    EntityNotFoundError,
    InvalidTransitionError,
    PersistenceError,
    ValidationError,
)
from hpos.domain.model.cart import Cart
from hpos.domain.model.guest import IdentifiedGuest
from hpos.domain.model.transaction import PaymentMethod, Transaction, TransactionStatus
from hpos.domain.service.authorization import AuthorizationGate, Role, SharedCodePolicy
from tests.builders import FIXED_NOW, product
from tests.fakes import FailingTransactionRepository, FakeTransactionRepository

LATER = FIXED_NOW + timedelta(hours=3)


def _seed(repo: FakeTransactionRepository, tab: bool = True) -> str:
    cart = Cart()
    cart.add_line(product("p1", price="200"))
    if tab:
        tx = Transaction.open_tab(IdentifiedGuest("g1", "Maria Santos"), cart.lines,
                                  cart.compute_tab_totals(), "TX20250115143022001", FIXED_NOW)
    else:
        tx = Transaction.pay_now(cart.lines, cart.compute_totals(), PaymentMethod.CASH,
                                 "TX20250115143022002", FIXED_NOW)
    repo.add(tx)
    return tx.id


class TestSettle:

    def test_settles_pending(self):
        repo = FakeTransactionRepository()
        tid = _seed(repo)
        dto = SettleTransactionHandler(repo, clock=lambda: LATER).handle(tid, "Credit Card")
        assert dto.status == "completed"
        assert dto.payment_method == "credit card"
        saved = repo.get_by_id(tid)
        assert saved.status is TransactionStatus.COMPLETED
        assert saved.paid_at == LATER

    def test_already_completed(self):
        repo = FakeTransactionRepository()
        tid = _seed(repo, tab=False)
        with pytest.raises(InvalidTransitionError):
            SettleTransactionHandler(repo).handle(tid, "cash")

    def test_invalid_method_checked_first(self):
        repo = FakeTransactionRepository()
        with pytest.raises(ValidationError):
            SettleTransactionHandler(repo).handle("missing", "pending")

    def test_unknown_transaction(self):
        with pytest.raises(EntityNotFoundError):
            SettleTransactionHandler(FakeTransactionRepository()).handle("T99", "cash")

    def test_save_failure_leaves_pending(self):
        repo = FailingTransactionRepository(fail_save_ids={"T1"})
        tid = _seed(repo)
        with pytest.raises(PersistenceError, match="Failed to process payment"):
            SettleTransactionHandler(repo).handle(tid, "cash")
        assert repo.get_by_id(tid).status is TransactionStatus.PENDING


class TestVoid:

    def _handler(self, repo) -> VoidTransactionHandler:
        gate = AuthorizationGate(SharedCodePolicy("1234"))
        return VoidTransactionHandler(repo, gate, clock=lambda: LATER)

    def test_manager_voids(self):
        repo = FakeTransactionRepository()
        tid = _seed(repo, tab=False)
        dto = self._handler(repo).handle(tid, Role.MANAGER)
        assert dto.status == "voided"
        assert repo.get_by_id(tid).voided_at == LATER

    def test_receptionist_with_code(self):
        repo = FakeTransactionRepository()
        tid = _seed(repo)
        self._handler(repo).handle(tid, Role.RECEPTIONIST, "1234")
        assert repo.get_by_id(tid).status is TransactionStatus.VOIDED

    def test_receptionist_wrong_code_leaves_transaction(self):
        repo = FakeTransactionRepository()
        tid = _seed(repo)
        with pytest.raises(AuthorizationError, match="Invalid manager code"):
            self._handler(repo).handle(tid, Role.RECEPTIONIST, "0000")
        assert repo.get_by_id(tid).status is TransactionStatus.PENDING

    def test_already_voided(self):
        repo = FakeTransactionRepository()
        tid = _seed(repo)
        handler = self._handler(repo)
        handler.handle(tid, Role.MANAGER)
        with pytest.raises(InvalidTransitionError):
            handler.handle(tid, Role.MANAGER)

    def test_unknown_transaction(self):
        with pytest.raises(EntityNotFoundError):
            self._handler(FakeTransactionRepository()).handle("T9", Role.MANAGER)
