"""Unit tests for the error taxonomy and ``wrap_store_errors``."""

from __future__ import annotations

import pytest
from django.db import DatabaseError, IntegrityError

from modules.core.exceptions import (
    DomainError,
    ErrorKind,
    GenericFailure,
    InvalidTransition,
    NotFound,
    TerminalStateViolation,
    wrap_store_errors,
)
from modules.orders.exceptions import ProductNotFound
from modules.payments.exceptions import InvalidStateForRefund, PaymentAlreadyExists

pytestmark = pytest.mark.unit


class TestErrorKinds:
    def test_terminal_state_is_conflict_surfaced_as_bad_request(self):
        exc = TerminalStateViolation("Order", "abc", "COMPLETED")
        assert exc.kind == ErrorKind.BAD_REQUEST
        assert "COMPLETED" in exc.message

    def test_invalid_transition_is_bad_request(self):
        exc = InvalidTransition("Order", "PENDING", "SHIPPED")
        assert exc.kind == ErrorKind.BAD_REQUEST
        assert exc.message == "Cannot transition Order from PENDING to SHIPPED."

    def test_invalid_state_for_refund_is_an_invalid_transition(self):
        exc = InvalidStateForRefund("pay-1", "AUTHORIZED")
        assert isinstance(exc, InvalidTransition)
        assert exc.code == "invalid_state_for_refund"
        assert exc.current == "AUTHORIZED"

    def test_product_not_found_is_not_found(self):
        exc = ProductNotFound("p-1")
        assert isinstance(exc, NotFound)
        assert exc.kind == ErrorKind.NOT_FOUND
        assert exc.entity_type == "Product"

    def test_payment_already_exists_is_conflict(self):
        assert PaymentAlreadyExists("o-1").kind == ErrorKind.CONFLICT


class TestWrapStoreErrors:
    def test_store_error_is_rewrapped(self):
        @wrap_store_errors("Failed to save.")
        def boom():
            raise IntegrityError("duplicate key value violates unique constraint")

        with pytest.raises(GenericFailure) as exc_info:
            boom()
        assert exc_info.value.message == "Failed to save."
        assert exc_info.value.kind == ErrorKind.FAILURE
        assert isinstance(exc_info.value.__cause__, DatabaseError)

    def test_domain_errors_pass_through(self):
        @wrap_store_errors("Failed to save.")
        def missing():
            raise NotFound("Order", "x")

        with pytest.raises(NotFound):
            missing()

    def test_return_value_is_preserved(self):
        @wrap_store_errors("Failed.")
        def ok(value):
            return value * 2

        assert ok(21) == 42

    def test_other_exceptions_are_not_wrapped(self):
        @wrap_store_errors("Failed.")
        def bad():
            raise ValueError("nope")

        with pytest.raises(ValueError):
            bad()

    def test_generic_failure_is_a_domain_error(self):
        assert issubclass(GenericFailure, DomainError)
