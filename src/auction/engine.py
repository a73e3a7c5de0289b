"""
Bidding Engine: round-based proxy bidding resolution.

Losing bidders are raised by their auto-increment until no losing bidder can
raise further. The highest current bid wins (earliest entry on ties) and pays
one increment above the best competitor's maximum, bounded by its own
starting and maximum bids.
"""

import logging
from typing import List, Optional, Sequence

from observability.tracing import create_span
from observability.metrics import (
    MetricsContext,
    auction_resolution_latency,
    metrics_collector,
)

from .bidder import Bidder
from .config import AuctionConfig
from .errors import AuctionError, ErrorType
from .precision import format_amount
from .result import AuctionResult

logger = logging.getLogger(__name__)


def _internal_error(message: str, operation: str, **context) -> AuctionError:
    return AuctionError(ErrorType.INTERNAL, message, operation=operation, context=context)


class BiddingEngine:
    """
    Resolve a proxy-bidding auction over a fixed set of bidders.

    The engine never mutates the caller's bidders: each run works on
    renormalized copies sorted by entry time (stable, so bidders with equal
    entry times keep their input order).
    """

    def __init__(self, config: Optional[AuctionConfig] = None):
        """
        Initialize bidding engine.

        Args:
            config: Optional auction configuration (round cap)
        """
        self.config = config or AuctionConfig()

    @property
    def max_rounds(self) -> int:
        return self.config.max_rounds

    def process_bids(self, bidders: Sequence[Bidder]) -> AuctionResult:
        """
        Run the auction to completion.

        Args:
            bidders: Participants; may be empty

        Returns:
            AuctionResult (no winner if bidders is empty)

        Raises:
            AuctionError: TIMEOUT if the round cap is reached, INTERNAL if an
                engine invariant is found broken
        """
        with create_span("auction.process_bids", {"auction.bidder_count": len(bidders)}) as span:
            try:
                with MetricsContext(auction_resolution_latency):
                    result = self._resolve(bidders)
            except AuctionError as e:
                metrics_collector.record_failure(e.error_type.value)
                logger.error(f"Auction resolution failed: {e}")
                raise

            span.set_attribute("auction.rounds", result.bidding_rounds)
            if result.winner is not None:
                span.set_attribute("auction.winner_id", result.winner.id)
                span.set_attribute("auction.winning_bid_cents", result.winning_bid_cents)

        metrics_collector.record_resolution(
            result.has_winner, result.total_bidders, result.bidding_rounds
        )
        return result

    def _resolve(self, bidders: Sequence[Bidder]) -> AuctionResult:
        if not bidders:
            logger.debug("No bidders submitted, returning empty result")
            return AuctionResult.empty()

        working = [bidder.renormalized() for bidder in bidders]
        working.sort(key=lambda b: b.entry_time)

        rounds = 0
        while rounds < self.max_rounds:
            try:
                incremented = self.increment_bids(working)
            except AuctionError as e:
                e.with_context({"round": rounds, "max_rounds": self.max_rounds})
                raise
            if not incremented:
                break
            rounds += 1

        if rounds >= self.max_rounds:
            raise AuctionError(
                ErrorType.TIMEOUT,
                "bidding process exceeded maximum rounds",
                operation="process_bids.timeout_check",
                context={
                    "max_rounds": self.max_rounds,
                    "bidder_count": len(bidders),
                    "final_round": rounds,
                },
            )

        try:
            winner = self.find_winner(working)
            winning_bid_cents = self.calculate_minimum_winning_bid_cents(working, winner)
        except AuctionError as e:
            e.add_context("rounds_completed", rounds)
            raise

        logger.info(
            f"Auction resolved: {winner.id} wins at {format_amount(winning_bid_cents)} "
            f"(final bid {format_amount(winner.current_bid_cents)}, "
            f"{len(working)} bidders, {rounds} rounds)"
        )

        return AuctionResult.build(winner, winning_bid_cents, len(bidders), rounds, working)

    def increment_bids(self, bidders: List[Bidder]) -> bool:
        """
        Run one bidding round.

        Every bidder strictly below the round-start highest bid that can
        still increment is raised once. Bidders tied at the top are not
        raised, even if another bidder reaches the same amount mid-round.

        Args:
            bidders: Working bidders (mutated in place)

        Returns:
            True if any bid was raised, False if the auction is stable
        """
        if len(bidders) <= 1:
            return False

        highest_cents = self.find_highest_bid_cents(bidders)

        any_incremented = False
        for bidder in bidders:
            if bidder.current_bid_cents >= highest_cents or not bidder.can_increment():
                continue

            if not bidder.increment():
                raise _internal_error(
                    "bidder increment failed despite can_increment() returning True",
                    "increment_bids",
                    bidder_id=bidder.id,
                    current_bid_cents=bidder.current_bid_cents,
                    max_bid_cents=bidder.max_bid_cents,
                    auto_increment_cents=bidder.auto_increment_cents,
                )
            any_incremented = True

        return any_incremented

    def find_highest_bid_cents(self, bidders: Sequence[Bidder]) -> int:
        """
        Highest current bid in cents (0 for an empty set).

        Raises:
            AuctionError: INTERNAL if any current bid is negative
        """
        highest_cents = 0
        for index, bidder in enumerate(bidders):
            if bidder.current_bid_cents < 0:
                raise _internal_error(
                    "bidder has negative current bid",
                    "find_highest_bid_cents",
                    bidder_id=bidder.id,
                    current_bid_cents=bidder.current_bid_cents,
                )
            if index == 0 or bidder.current_bid_cents > highest_cents:
                highest_cents = bidder.current_bid_cents
        return highest_cents

    def find_winner(self, bidders: Sequence[Bidder]) -> Optional[Bidder]:
        """
        Select the bidder with the highest current bid.

        Ties go to the earlier entry time; with equal entry times the bidder
        appearing first wins.

        Returns:
            Winning bidder, or None for an empty set

        Raises:
            AuctionError: INTERNAL if any current bid is negative
        """
        winner = None
        for bidder in bidders:
            if bidder.current_bid_cents < 0:
                raise _internal_error(
                    "bidder has negative current bid",
                    "find_winner",
                    bidder_id=bidder.id,
                    current_bid_cents=bidder.current_bid_cents,
                )

            if winner is None or bidder.current_bid_cents > winner.current_bid_cents:
                winner = bidder
            elif (
                bidder.current_bid_cents == winner.current_bid_cents
                and bidder.entry_time < winner.entry_time
            ):
                winner = bidder

        return winner

    def calculate_minimum_winning_bid_cents(
        self, bidders: Sequence[Bidder], winner: Optional[Bidder]
    ) -> int:
        """
        Lowest amount the winner has to pay, in cents.

        The winner beats the highest maximum bid among the other bidders by
        one of its own increments, but never pays more than its maximum or
        less than its starting bid. Without competitors it pays its starting
        bid.

        Args:
            bidders: All working bidders
            winner: Winning bidder (must be one of bidders)

        Returns:
            Winning bid in cents

        Raises:
            AuctionError: INTERNAL if the winner is missing or the computed
                amount is negative
        """
        operation = "calculate_minimum_winning_bid_cents"

        if winner is None:
            raise _internal_error("winner cannot be None", operation, bidder_count=len(bidders))

        if not any(bidder.id == winner.id for bidder in bidders):
            raise _internal_error(
                "winner not found in bidder set",
                operation,
                winner_id=winner.id,
                bidder_count=len(bidders),
            )

        competitors = [bidder for bidder in bidders if bidder.id != winner.id]
        if not competitors:
            return winner.starting_bid_cents

        runner_up = max(competitors, key=lambda b: b.max_bid_cents)

        winning_cents = runner_up.max_bid_cents + winner.auto_increment_cents
        winning_cents = min(winning_cents, winner.max_bid_cents)
        winning_cents = max(winning_cents, winner.starting_bid_cents)

        if winning_cents < 0:
            raise _internal_error(
                "calculated minimum winning bid is negative",
                operation,
                winner_id=winner.id,
                calculated_bid_cents=winning_cents,
                runner_up_id=runner_up.id,
                runner_up_max_bid_cents=runner_up.max_bid_cents,
            )

        return winning_cents
