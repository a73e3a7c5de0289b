"""
Auction errors: a single tagged failure type with structured context.
"""

from collections import defaultdict
from dataclasses import dataclass, asdict
from enum import Enum
from typing import Any, Dict, List, Optional


class ErrorType(Enum):
    """Failure categories"""
    VALIDATION = "validation"   # Bad input rejected before processing
    TIMEOUT = "timeout"         # Round cap exceeded
    INTERNAL = "internal"       # Engine invariant observed broken


@dataclass
class ValidationIssue:
    """One invalid field on one bidder"""
    bidder_id: str
    field: str
    message: str
    value: str = ""

    def __str__(self) -> str:
        text = f"validation error for bidder {self.bidder_id}, field {self.field}: {self.message}"
        if self.value:
            text += f" (value: {self.value})"
        return text


class AuctionError(Exception):
    """
    Failure raised by the validator, the engine or the service.

    The error_type discriminates the category; context holds string-keyed
    diagnostic values (round, bidder id, observed amounts). The underlying
    cause, if any, is carried through exception chaining.
    """

    def __init__(
        self,
        error_type: ErrorType,
        message: str,
        details: Optional[List[ValidationIssue]] = None,
        operation: str = "",
        context: Optional[Dict[str, str]] = None,
    ):
        super().__init__(message)
        self.error_type = error_type
        self.message = message
        self.details: List[ValidationIssue] = list(details or [])
        self.operation = operation
        self.context: Dict[str, str] = {}
        if context:
            self.with_context(context)

    @property
    def cause(self) -> Optional[BaseException]:
        return self.__cause__

    @property
    def is_fatal(self) -> bool:
        """Timeout and internal failures abort the run and are never retried"""
        return self.error_type in (ErrorType.TIMEOUT, ErrorType.INTERNAL)

    def with_operation(self, operation: str) -> "AuctionError":
        self.operation = operation
        return self

    def add_context(self, key: str, value: Any) -> None:
        self.context[key] = str(value)

    def with_context(self, context: Dict[str, Any]) -> "AuctionError":
        for key, value in context.items():
            self.add_context(key, value)
        return self

    def get_context(self, key: str) -> Optional[str]:
        return self.context.get(key)

    def add_validation_issue(
        self, bidder_id: str, field: str, message: str, value: str = ""
    ) -> None:
        self.details.append(ValidationIssue(bidder_id, field, message, value))

    def has_validation_issues(self) -> bool:
        return len(self.details) > 0

    def issues_by_field(self) -> Dict[str, List[ValidationIssue]]:
        """Group validation issues by field name"""
        grouped: Dict[str, List[ValidationIssue]] = defaultdict(list)
        for issue in self.details:
            grouped[issue.field].append(issue)
        return dict(grouped)

    def issues_by_bidder(self) -> Dict[str, List[ValidationIssue]]:
        """Group validation issues by bidder ID"""
        grouped: Dict[str, List[ValidationIssue]] = defaultdict(list)
        for issue in self.details:
            grouped[issue.bidder_id].append(issue)
        return dict(grouped)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to dictionary"""
        return {
            "type": self.error_type.value,
            "message": self.message,
            "operation": self.operation,
            "context": dict(self.context),
            "details": [asdict(issue) for issue in self.details],
            "cause": str(self.cause) if self.cause is not None else None,
        }

    def __str__(self) -> str:
        parts = [f"{self.error_type.value} error: {self.message}"]
        if self.operation:
            parts.append(f"operation: {self.operation}")
        if self.details:
            parts.append(f"validation errors: {len(self.details)}")
        if self.cause is not None:
            parts.append(f"caused by: {self.cause}")
        return "; ".join(parts)
