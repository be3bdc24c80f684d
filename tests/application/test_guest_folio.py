"""Integration tests for folio loading and batch payment."""

import pytest

from hpos.application.dto import FolioDTO
from hpos.application.guest_folio import LoadFolioHandler, PaySelectedHandler
from hpos.application.settle_transaction import SettleTransactionHandler
from hpos.domain.exceptions import EntityNotFoundError, ValidationError
from hpos.domain.model.cart import Cart
from hpos.domain.model.folio import PaymentSelection
from hpos.domain.model.guest import IdentifiedGuest
from hpos.domain.model.transaction import PaymentMethod, Transaction, TransactionStatus
from hpos.domain.model.value_objects import Money
from tests.builders import FIXED_NOW, booking, product
from tests.fakes import (
    FailingTransactionRepository,
    FakeGuestDirectory,
    FakeTransactionRepository,
)


def _tab(repo, price: str, guest_id: str = "g1") -> str:
    cart = Cart()
    cart.add_line(product("p1", price=price))
    tx = Transaction.open_tab(IdentifiedGuest(guest_id, "Maria Santos"), cart.lines,
                              cart.compute_tab_totals(), "TX20250115143022001", FIXED_NOW)
    repo.add(tx)
    return tx.id


def _setup(repo=None):
    repo = repo if repo is not None else FakeTransactionRepository()
    directory = FakeGuestDirectory([booking(total_price="4500")])
    _tab(repo, "100")   # T1: 110
    _tab(repo, "200")   # T2: 220
    _tab(repo, "300")   # T3: 330
    _tab(repo, "999", guest_id="g2")  # T4: someone else
    load = LoadFolioHandler(repo, directory)
    pay = PaySelectedHandler(SettleTransactionHandler(repo, clock=lambda: FIXED_NOW))
    return load, pay, repo


class TestLoadFolio:

    def test_groups_guest_transactions(self):
        load, _, _ = _setup()
        folio = load.handle("g1")
        assert folio.guest_name == "Maria Santos"
        assert folio.pending_ids == ["T1", "T2", "T3"]
        assert folio.pending_total == Money.of("660.00")
        assert folio.total_paid == Money.of("4500")

    def test_unknown_guest(self):
        load, _, _ = _setup()
        with pytest.raises(EntityNotFoundError):
            load.handle("nobody")

    def test_name_falls_back_to_transactions(self):
        load, _, _ = _setup()
        assert load.handle("g2").guest_name == "Maria Santos"

    def test_dto(self):
        load, _, _ = _setup()
        folio = load.handle("g1")
        selection = PaymentSelection(folio)
        selection.toggle("T2")
        dto = FolioDTO.from_folio(folio, selection)
        assert dto.pending_total == "₱660.00"
        assert dto.total_paid == "₱4,500.00"
        assert dto.selected_total == "₱220.00"


class TestPaySelected:

    def test_pays_all_selected(self):
        load, pay, repo = _setup()
        selection = PaymentSelection(load.handle("g1"))
        selection.select_all()
        result = pay.handle(selection, "cash")
        assert result.succeeded
        assert result.settled_ids == ["T1", "T2", "T3"]
        assert result.settled_total == "₱660.00"
        assert selection.is_empty

        folio = load.handle("g1")
        assert folio.pending == []
        assert folio.total_paid == Money.of("5160.00")
        assert all(t.payment_method is PaymentMethod.CASH for t in folio.completed)

    def test_empty_selection(self):
        load, pay, _ = _setup()
        with pytest.raises(ValidationError, match="Please select transactions to pay"):
            pay.handle(PaymentSelection(load.handle("g1")), "cash")

    def test_invalid_method(self):
        load, pay, repo = _setup()
        selection = PaymentSelection(load.handle("g1"))
        selection.select_all()
        with pytest.raises(ValidationError):
            pay.handle(selection, "pending")
        assert repo.get_by_id("T1").status is TransactionStatus.PENDING

    def test_partial_failure_is_reported(self):
        repo = FailingTransactionRepository(fail_save_ids={"T2"})
        load, pay, _ = _setup(repo)
        selection = PaymentSelection(load.handle("g1"))
        selection.select(["T1", "T2", "T3"])
        result = pay.handle(selection, "card")

        assert not result.succeeded
        assert result.settled_ids == ["T1"]
        assert result.settled_total == "₱110.00"
        assert result.failed_id == "T2"
        assert repo.get_by_id("T1").status is TransactionStatus.COMPLETED
        assert repo.get_by_id("T2").status is TransactionStatus.PENDING
        assert repo.get_by_id("T3").status is TransactionStatus.PENDING

    def test_stale_selection_stops_batch(self):
        load, pay, repo = _setup()
        selection = PaymentSelection(load.handle("g1"))
        selection.select(["T1", "T2"])
        # Settled elsewhere after the folio was loaded.
        SettleTransactionHandler(repo).handle("T2", "cash")
        result = pay.handle(selection, "card")
        assert result.settled_ids == ["T1"]
        assert result.failed_id == "T2"
