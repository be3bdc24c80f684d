"""Unit tests for the Transaction aggregate and its status machine."""

import random
import re
from datetime import timedelta

import pytest

from hpos.domain.exceptions import InvalidTransitionError, ValidationError
from hpos.domain.model.cart import Cart
from hpos.domain.model.guest import WALK_IN, IdentifiedGuest
from hpos.domain.model.transaction import (
    PaymentMethod,
    Transaction,
    TransactionStatus,
    generate_transaction_number,
)
from hpos.domain.model.validation import validate_transaction_number
from hpos.domain.model.value_objects import Money
from tests.builders import FIXED_NOW, percentage, product

GUEST = IdentifiedGuest("g1", "Maria Santos")


def _cart() -> Cart:
    cart = Cart()
    cart.add_line(product("p1", price="150"))
    cart.add_line(product("p1", price="150"))
    return cart


def _tab() -> Transaction:
    cart = _cart()
    return Transaction.open_tab(GUEST, cart.lines, cart.compute_tab_totals(),
                                "TX20250115143022001", FIXED_NOW)


def _walk_in(method: PaymentMethod = PaymentMethod.CASH) -> Transaction:
    cart = _cart()
    return Transaction.pay_now(cart.lines, cart.compute_totals(), method,
                               "TX20250115143022002", FIXED_NOW)


class TestTransactionNumber:

    def test_format(self):
        number = generate_transaction_number(FIXED_NOW, random.Random(7))
        assert re.fullmatch(r"TX20250115143022\d{3}", number)
        assert validate_transaction_number(number).ok

    def test_suffix_is_zero_padded(self):
        class Low:
            def randint(self, a, b):
                return 5

        assert generate_transaction_number(FIXED_NOW, Low()) == "TX20250115143022005"


class TestFactories:

    def test_open_tab_is_pending(self):
        tx = _tab()
        assert tx.status is TransactionStatus.PENDING
        assert tx.payment_method is PaymentMethod.PENDING
        assert tx.guest_id == "g1"
        assert tx.paid_at is None
        assert tx.total == Money.of("330.00")

    def test_pay_now_is_completed_walk_in(self):
        tx = _walk_in()
        assert tx.status is TransactionStatus.COMPLETED
        assert tx.is_walk_in
        assert tx.guest == WALK_IN
        assert tx.paid_at == FIXED_NOW

    def test_items_snapshot_lines(self):
        tx = _walk_in()
        assert len(tx.items) == 1
        assert tx.items[0].quantity.value == 2
        assert tx.items[0].total_price == Money.of("300")

    def test_discount_recorded(self):
        cart = Cart()
        cart.add_line(product("p1", price="1000"))
        cart.apply_discount(percentage("20"))
        tx = Transaction.pay_now(cart.lines, cart.compute_totals(), PaymentMethod.CARD,
                                 "TX20250115143022003", FIXED_NOW)
        assert tx.discount == Money.of("200.00")
        assert tx.total == Money.of("880.00")

    def test_empty_cart_rejected(self):
        with pytest.raises(ValidationError, match="Cart is empty"):
            Transaction.pay_now([], Cart().compute_totals(), PaymentMethod.CASH,
                                "TX20250115143022004", FIXED_NOW)


class TestSettle:

    def test_pending_to_completed(self):
        tx = _tab()
        later = FIXED_NOW + timedelta(hours=2)
        tx.settle(PaymentMethod.CREDIT_CARD, later)
        assert tx.status is TransactionStatus.COMPLETED
        assert tx.payment_method is PaymentMethod.CREDIT_CARD
        assert tx.paid_at == later

    def test_settle_completed_fails(self):
        tx = _walk_in()
        with pytest.raises(InvalidTransitionError):
            tx.settle(PaymentMethod.CARD, FIXED_NOW)

    def test_settle_with_pending_method_fails(self):
        tx = _tab()
        with pytest.raises(ValidationError):
            tx.settle(PaymentMethod.PENDING, FIXED_NOW)
        assert tx.is_pending

    def test_amounts_unchanged_by_settlement(self):
        tx = _tab()
        before = (tx.subtotal, tx.tax, tx.total)
        tx.settle(PaymentMethod.CASH, FIXED_NOW)
        assert (tx.subtotal, tx.tax, tx.total) == before


class TestVoidAndRefund:

    @pytest.mark.parametrize("factory", [_tab, _walk_in])
    def test_void(self, factory):
        tx = factory()
        tx.void(FIXED_NOW)
        assert tx.status is TransactionStatus.VOIDED
        assert tx.voided_at == FIXED_NOW

    def test_void_twice_fails(self):
        tx = _tab()
        tx.void(FIXED_NOW)
        with pytest.raises(InvalidTransitionError):
            tx.void(FIXED_NOW)

    def test_voided_cannot_settle(self):
        tx = _tab()
        tx.void(FIXED_NOW)
        with pytest.raises(InvalidTransitionError):
            tx.settle(PaymentMethod.CASH, FIXED_NOW)

    def test_refund_completed(self):
        tx = _walk_in()
        tx.refund("Guest was overcharged", FIXED_NOW)
        assert tx.status is TransactionStatus.REFUNDED
        assert tx.refund_reason == "Guest was overcharged"

    def test_refund_pending_fails(self):
        with pytest.raises(InvalidTransitionError):
            _tab().refund("Guest was overcharged", FIXED_NOW)


class TestPaymentMethodParse:

    @pytest.mark.parametrize("raw,expected", [
        ("Cash", PaymentMethod.CASH),
        ("room charge", PaymentMethod.ROOM_CHARGE),
        ("DEBIT CARD", PaymentMethod.DEBIT_CARD),
    ])
    def test_valid(self, raw, expected):
        assert PaymentMethod.parse(raw) is expected

    @pytest.mark.parametrize("raw", ["", "pending", "bitcoin", None])
    def test_invalid(self, raw):
        with pytest.raises(ValidationError):
            PaymentMethod.parse(raw)
