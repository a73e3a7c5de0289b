"""
Tests for AuctionError and ValidationIssue.
"""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

import pytest
from auction.errors import AuctionError, ErrorType, ValidationIssue


class TestValidationIssue:
    """Test validation issue formatting"""

    def test_str_without_value(self):
        issue = ValidationIssue("bidder1", "starting_bid", "starting bid cannot be negative")
        assert str(issue) == (
            "validation error for bidder bidder1, field starting_bid: "
            "starting bid cannot be negative"
        )

    def test_str_with_value(self):
        issue = ValidationIssue("bidder2", "max_bid", "maximum bid cannot be negative", "-100.00")
        assert str(issue) == (
            "validation error for bidder bidder2, field max_bid: "
            "maximum bid cannot be negative (value: -100.00)"
        )

    def test_str_with_empty_bidder_id(self):
        issue = ValidationIssue("", "id", "bidder ID is required")
        assert str(issue) == "validation error for bidder , field id: bidder ID is required"


class TestAuctionErrorMessage:
    """Test error string formatting"""

    def test_simple(self):
        error = AuctionError(ErrorType.VALIDATION, "validation failed")
        assert str(error) == "validation error: validation failed"

    def test_with_operation(self):
        error = AuctionError(ErrorType.INTERNAL, "processing failed", operation="process_bids")
        assert str(error) == "internal error: processing failed; operation: process_bids"

    def test_with_details(self):
        error = AuctionError(
            ErrorType.VALIDATION,
            "validation failed",
            details=[
                ValidationIssue("bidder1", "starting_bid", "negative bid"),
                ValidationIssue("bidder2", "max_bid", "negative bid"),
            ],
        )
        assert str(error) == "validation error: validation failed; validation errors: 2"

    def test_with_cause(self):
        try:
            try:
                raise ValueError("underlying error")
            except ValueError as e:
                raise AuctionError(ErrorType.INTERNAL, "engine failure") from e
        except AuctionError as error:
            assert isinstance(error.cause, ValueError)
            assert str(error) == "internal error: engine failure; caused by: underlying error"

    def test_with_all_parts(self):
        error = AuctionError(
            ErrorType.TIMEOUT,
            "complex error",
            details=[ValidationIssue("bidder1", "starting_bid", "invalid")],
            operation="determine_winner",
        )
        error.__cause__ = RuntimeError("root cause")

        assert str(error) == (
            "timeout error: complex error; operation: determine_winner; "
            "validation errors: 1; caused by: root cause"
        )

    def test_pytest_match(self):
        """Raised errors match on their formatted text"""
        with pytest.raises(AuctionError, match="timeout error: too many rounds"):
            raise AuctionError(ErrorType.TIMEOUT, "too many rounds")


class TestAuctionErrorContext:
    """Test context and operation helpers"""

    def test_no_cause(self):
        assert AuctionError(ErrorType.VALIDATION, "x").cause is None

    def test_add_and_get_context(self):
        error = AuctionError(ErrorType.VALIDATION, "validation failed")
        error.add_context("bidder_count", 5)
        error.add_context("operation", "validate_bidders")

        assert error.get_context("bidder_count") == "5"
        assert error.get_context("operation") == "validate_bidders"
        assert error.get_context("missing") is None
        assert len(error.context) == 2

    def test_with_operation_returns_self(self):
        error = AuctionError(ErrorType.VALIDATION, "validation failed")
        assert error.with_operation("check") is error
        assert error.operation == "check"

    def test_with_context_returns_self(self):
        error = AuctionError(ErrorType.VALIDATION, "validation failed")
        assert error.with_context({"key1": "value1", "key2": 2}) is error
        assert error.context == {"key1": "value1", "key2": "2"}

    def test_constructor_context(self):
        error = AuctionError(ErrorType.INTERNAL, "x", context={"round": 3})
        assert error.context == {"round": "3"}

    def test_is_fatal(self):
        assert AuctionError(ErrorType.TIMEOUT, "x").is_fatal is True
        assert AuctionError(ErrorType.INTERNAL, "x").is_fatal is True
        assert AuctionError(ErrorType.VALIDATION, "x").is_fatal is False


class TestValidationIssues:
    """Test grouping of validation issues"""

    def _error(self):
        error = AuctionError(ErrorType.VALIDATION, "validation failed")
        error.add_validation_issue("bidder1", "starting_bid", "negative bid")
        error.add_validation_issue("bidder2", "starting_bid", "too high")
        error.add_validation_issue("bidder1", "max_bid", "negative bid", "-1.00")
        return error

    def test_has_validation_issues(self):
        error = AuctionError(ErrorType.VALIDATION, "validation failed")
        assert error.has_validation_issues() is False
        error.add_validation_issue("bidder1", "starting_bid", "negative bid")
        assert error.has_validation_issues() is True

    def test_issues_by_field(self):
        grouped = self._error().issues_by_field()
        assert len(grouped) == 2
        assert len(grouped["starting_bid"]) == 2
        assert len(grouped["max_bid"]) == 1

    def test_issues_by_bidder(self):
        grouped = self._error().issues_by_bidder()
        assert len(grouped) == 2
        assert len(grouped["bidder1"]) == 2
        assert len(grouped["bidder2"]) == 1

    def test_to_dict(self):
        data = self._error().with_operation("validate_bidders").to_dict()

        assert data["type"] == "validation"
        assert data["operation"] == "validate_bidders"
        assert data["cause"] is None
        assert data["details"][2] == {
            "bidder_id": "bidder1",
            "field": "max_bid",
            "message": "negative bid",
            "value": "-1.00",
        }
