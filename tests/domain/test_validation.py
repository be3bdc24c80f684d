"""Unit tests for the validation rules."""


import pytest

from hpos.domain.exceptions import EntityNotFoundError, ValidationError
from hpos.domain.model.guest import Guest, Room
from hpos.domain.model.validation import (
    ErrorKind,
    FieldTag,
    ValidationResult,
    first_failure,
    has_failures,
    validate_cart_total,
    validate_discount_applicability,
    validate_discount_code,
    validate_guest_assignment,
    validate_payment_method,
    validate_product_availability,
    validate_quantity,
    validate_refund_amount,
    validate_refund_reason,
    validate_room_charge,
    validate_search_query,
    validate_transaction_number,
)
from hpos.domain.model.value_objects import Money
from tests.builders import fixed, percentage


class TestQuantityRule:

    @pytest.mark.parametrize("q", [1, 50, 99])
    def test_in_range(self, q):
        assert validate_quantity(q).ok

    def test_below_one(self):
        result = validate_quantity(0)
        assert not result.ok
        assert result.message == "Quantity must be at least 1"
        assert result.field is FieldTag.QUANTITY
        assert result.kind is ErrorKind.VALIDATION

    def test_above_max(self):
        assert validate_quantity(100).message == "Maximum quantity is 99"

    def test_custom_max(self):
        assert not validate_quantity(6, max_quantity=5).ok


class TestCartTotalRule:

    def test_zero_rejected(self):
        assert validate_cart_total(Money.zero()).message == "Cart total must be greater than 0"

    def test_limit_is_inclusive(self):
        assert validate_cart_total(Money.of("50000")).ok

    def test_over_limit(self):
        result = validate_cart_total(Money.of("50000.01"))
        assert result.message == "Transaction total cannot exceed ₱50,000"


class TestDiscountRules:

    @pytest.mark.parametrize("code,message", [
        ("", "Discount code is required"),
        ("   ", "Discount code is required"),
        ("AB", "Discount code must be at least 3 characters"),
        ("SAVE-10", "Discount code can only contain letters and numbers"),
        ("ABC\n", "Discount code can only contain letters and numbers"),
        ("CAF\u00c9", "Discount code can only contain letters and numbers"),
    ])
    def test_bad_codes(self, code, message):
        result = validate_discount_code(code)
        assert not result.ok
        assert result.message == message
        assert result.field is FieldTag.DISCOUNT_CODE

    def test_good_code_any_case(self):
        assert validate_discount_code("welcome10").ok

    def test_minimum_subtotal(self):
        result = validate_discount_applicability(Money.of("499.99"), percentage("10", "500"))
        assert result.message == "Minimum purchase of ₱500.00 required for this discount"

    def test_minimum_met(self):
        assert validate_discount_applicability(Money.of("500"), percentage("10", "500")).ok

    def test_percentage_out_of_range(self):
        result = validate_discount_applicability(Money.of("100"), percentage("120"))
        assert result.message == "Percentage discount must be between 0% and 100%"

    def test_fixed_must_be_positive(self):
        result = validate_discount_applicability(Money.of("100"), fixed("0"))
        assert result.message == "Fixed discount must be greater than 0"


class TestPaymentRules:

    @pytest.mark.parametrize("method", ["card", "CASH", "Room Charge", "credit card", "debit card"])
    def test_allowed(self, method):
        assert validate_payment_method(method).ok

    @pytest.mark.parametrize("method", ["pending", "bitcoin"])
    def test_not_allowed(self, method):
        assert validate_payment_method(method).message == "Invalid payment method"

    def test_missing(self):
        assert validate_payment_method("").message == "Payment method is required"

    def test_room_charge_needs_guest_and_booking(self):
        assert not validate_room_charge("g1", None).ok
        assert not validate_room_charge(None, "b1").ok
        assert validate_room_charge("g1", "b1").ok


class TestRefundRules:

    def test_reason_bounds(self):
        assert validate_refund_reason("").message == "Refund reason is required"
        assert not validate_refund_reason("too short").ok
        assert validate_refund_reason("x" * 10).ok
        assert validate_refund_reason("x" * 500).ok
        assert validate_refund_reason("x" * 501).message == (
            "Refund reason cannot exceed 500 characters"
        )

    def test_amount_bounds(self):
        assert not validate_refund_amount(Money.zero()).ok
        assert validate_refund_amount(Money.of("10000")).ok
        assert validate_refund_amount(Money.of("10000.01")).message == (
            "Refund amount cannot exceed ₱10,000"
        )


class TestGuestAssignment:

    def test_missing_guest(self):
        assert validate_guest_assignment(None, Room("101")).field is FieldTag.GUEST

    def test_missing_room(self):
        assert validate_guest_assignment(Guest("Ana", "Cruz"), None).field is FieldTag.ROOM

    def test_missing_name(self):
        result = validate_guest_assignment(Guest("Ana", ""), Room("101"))
        assert result.message == "Guest name is required"

    def test_missing_room_number(self):
        result = validate_guest_assignment(Guest("Ana", "Cruz"), Room(""))
        assert result.message == "Room number is required"

    def test_complete(self):
        assert validate_guest_assignment(Guest("Ana", "Cruz"), Room("101")).ok


class TestMiscRules:

    def test_product_availability(self):
        assert validate_product_availability(False).message == "Product is not available"
        assert validate_product_availability(True, stock=0).message == "Product is out of stock"
        assert validate_product_availability(True).ok

    def test_search_query_length(self):
        assert validate_search_query("x" * 100).ok
        assert not validate_search_query("x" * 101).ok
        assert validate_search_query(None).ok

    def test_transaction_number_format(self):
        assert validate_transaction_number("TX20250115143022087").ok
        assert not validate_transaction_number("TX2025011514302208").ok
        assert not validate_transaction_number("TX20250115143022087123").ok
        assert not validate_transaction_number("").ok

    @pytest.mark.parametrize("number", [
        "TX20250115143022087\n",
        "TX\u0662\u0660\u0662\u0665\u0660\u0661\u0661\u0665\u0661\u0664\u0663\u0660\u0662\u0662\u0660\u0668\u0667",
        " TX20250115143022087",
    ])
    def test_transaction_number_strict(self, number):
        assert not validate_transaction_number(number).ok


class TestResultHelpers:

    def test_first_failure(self):
        results = [validate_quantity(1), validate_quantity(0), validate_quantity(100)]
        assert first_failure(results).message == "Quantity must be at least 1"
        assert has_failures(results)
        assert not has_failures([validate_quantity(1)])

    def test_raise_for_failure_validation(self):
        with pytest.raises(ValidationError) as excinfo:
            validate_quantity(0).raise_for_failure()
        assert excinfo.value.field == "quantity"

    def test_raise_for_failure_not_found(self):
        result = ValidationResult.failure("nope", FieldTag.DISCOUNT_CODE, kind=ErrorKind.NOT_FOUND)
        with pytest.raises(EntityNotFoundError, match="nope"):
            result.raise_for_failure()

    def test_success_does_not_raise(self):
        ValidationResult.success().raise_for_failure()
