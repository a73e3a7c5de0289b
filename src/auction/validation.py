"""
Bid validation: field-level checks run before the engine sees the bidders.
"""

import logging
from typing import List, Sequence, Set

from .bidder import Bidder
from .errors import AuctionError, ErrorType, ValidationIssue
from .precision import format_amount

logger = logging.getLogger(__name__)


class BidValidator:
    """
    Reject structurally invalid bidders.

    Rules:
    - id and name must be non-blank
    - starting and maximum bids cannot be negative
    - auto-increment must be greater than zero
    - starting bid cannot exceed the maximum bid
    - bidder ids must be unique within an auction
    """

    def check_bidder(self, bidder: Bidder) -> List[ValidationIssue]:
        """
        Collect all validation issues for one bidder.

        Args:
            bidder: Bidder to check

        Returns:
            List of issues (empty if the bidder is valid)
        """
        issues = []

        if not isinstance(bidder.id, str) or not bidder.id.strip():
            issues.append(ValidationIssue("", "id", "bidder ID is required", str(bidder.id or "")))

        if not isinstance(bidder.name, str) or not bidder.name.strip():
            issues.append(
                ValidationIssue(bidder.id, "name", "bidder name is required", str(bidder.name or ""))
            )

        if bidder.starting_bid_cents < 0:
            issues.append(ValidationIssue(
                bidder.id, "starting_bid", "starting bid cannot be negative",
                format_amount(bidder.starting_bid_cents),
            ))

        if bidder.max_bid_cents < 0:
            issues.append(ValidationIssue(
                bidder.id, "max_bid", "maximum bid cannot be negative",
                format_amount(bidder.max_bid_cents),
            ))

        if bidder.auto_increment_cents <= 0:
            issues.append(ValidationIssue(
                bidder.id, "auto_increment", "auto-increment amount must be greater than zero",
                format_amount(bidder.auto_increment_cents),
            ))

        if bidder.starting_bid_cents > bidder.max_bid_cents:
            issues.append(ValidationIssue(
                bidder.id, "starting_bid", "starting bid cannot be greater than maximum bid",
                f"starting: {format_amount(bidder.starting_bid_cents)}, "
                f"max: {format_amount(bidder.max_bid_cents)}",
            ))

        return issues

    def validate_bidder(self, bidder: Bidder) -> None:
        """
        Validate a single bidder.

        Raises:
            AuctionError: VALIDATION error listing every issue found
        """
        issues = self.check_bidder(bidder)
        if issues:
            raise AuctionError(
                ErrorType.VALIDATION,
                f"validation failed for bidder {bidder.id}",
                details=issues,
                operation="validate_bidder",
                context={"bidder_id": bidder.id, "bidder_name": bidder.name},
            )

    def validate_bidders(self, bidders: Sequence[Bidder]) -> None:
        """
        Validate a full bidder set, collecting issues across all bidders.

        Duplicate ids are reported once per duplicate and the duplicate is
        not checked further. Issue values are prefixed with the 1-based
        position of the bidder in the input.

        Raises:
            AuctionError: VALIDATION error if the set is empty or invalid
        """
        if not bidders:
            raise AuctionError(
                ErrorType.VALIDATION,
                "no bidders provided",
                operation="validate_bidders",
                context={"bidder_count": 0},
            )

        all_issues: List[ValidationIssue] = []
        seen_ids: Set[str] = set()
        valid_count = 0

        for position, bidder in enumerate(bidders, start=1):
            if bidder.id in seen_ids:
                all_issues.append(
                    ValidationIssue(bidder.id, "id", "duplicate bidder ID", str(bidder.id))
                )
                continue
            seen_ids.add(bidder.id)

            issues = self.check_bidder(bidder)
            if not issues:
                valid_count += 1
                continue

            for issue in issues:
                issue.value = f"position {position}: {issue.value}"
            all_issues.extend(issues)

        if all_issues:
            invalid_count = len({issue.bidder_id for issue in all_issues})
            logger.info(
                f"Rejected {invalid_count}/{len(bidders)} bidders "
                f"({len(all_issues)} validation errors)"
            )
            raise AuctionError(
                ErrorType.VALIDATION,
                f"validation failed for {invalid_count} out of {len(bidders)} bidders",
                details=all_issues,
                operation="validate_bidders",
                context={
                    "total_bidders": len(bidders),
                    "valid_bidders": valid_count,
                    "invalid_bidders": invalid_count,
                    "total_validation_errors": len(all_issues),
                },
            )
