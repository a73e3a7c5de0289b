"""
Auction result: immutable snapshot of a resolved auction.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, Optional, Sequence, Tuple

from .bidder import Bidder
from .precision import to_decimal


@dataclass(frozen=True)
class AuctionResult:
    """
    Outcome of one engine run.

    Attributes:
        winner: Snapshot of the winning bidder (None if nobody bid)
        winning_bid_cents: Amount the winner pays, in cents
        total_bidders: Number of participants
        bidding_rounds: Number of increment rounds executed
        all_bidders: Final state of every bidder, in entry-time order
    """

    winner: Optional[Bidder]
    winning_bid_cents: int
    total_bidders: int
    bidding_rounds: int
    all_bidders: Tuple[Bidder, ...] = ()

    @classmethod
    def build(
        cls,
        winner: Optional[Bidder],
        winning_bid_cents: int,
        total_bidders: int,
        bidding_rounds: int,
        all_bidders: Sequence[Bidder],
    ) -> "AuctionResult":
        """
        Snapshot the engine's working bidders into a result.

        Bidders are stored as read-only copies, so neither the working set
        nor callers can change the result afterwards; the winner refers to
        its copy inside all_bidders.
        """
        snapshots = tuple(bidder.frozen() for bidder in all_bidders)

        winner_snapshot = None
        if winner is not None:
            for original, snapshot in zip(all_bidders, snapshots):
                if original is winner:
                    winner_snapshot = snapshot
                    break
            else:
                winner_snapshot = winner.frozen()

        return cls(
            winner=winner_snapshot,
            winning_bid_cents=winning_bid_cents,
            total_bidders=total_bidders,
            bidding_rounds=bidding_rounds,
            all_bidders=snapshots,
        )

    @classmethod
    def empty(cls, total_bidders: int = 0, bidding_rounds: int = 0) -> "AuctionResult":
        """Result with no winner"""
        return cls(None, 0, total_bidders, bidding_rounds, ())

    @property
    def winning_bid(self) -> Decimal:
        return to_decimal(self.winning_bid_cents)

    @property
    def has_winner(self) -> bool:
        return self.winner is not None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to dictionary"""
        return {
            "winner": self.winner.to_dict() if self.winner else None,
            "winning_bid": f"{self.winning_bid:.2f}",
            "total_bidders": self.total_bidders,
            "bidding_rounds": self.bidding_rounds,
            "all_bidders": [bidder.to_dict() for bidder in self.all_bidders],
        }
