"""
Bidder: a participant's bid parameters and mutable bidding state.
"""

import time
from decimal import Decimal
from typing import Any, Dict, Optional

from .precision import Amount, to_minor_units, to_decimal


class Bidder:
    """
    Auction participant with a proxy bid.

    Bid parameters are held in integer cents; the Decimal attributes
    (starting_bid, max_bid, auto_increment, current_bid) are views over
    those integers.

    Attributes:
        id: Unique bidder identifier
        name: Display name
        starting_bid_cents: Opening bid
        max_bid_cents: Private maximum the bidder will go to
        auto_increment_cents: Step used when raising the bid
        current_bid_cents: Current visible bid
        is_active: False once the current bid has reached max_bid
        entry_time: Entry timestamp in nanoseconds, used only for tie-breaking
    """

    def __init__(
        self,
        id: str,
        name: str,
        starting_bid: Amount,
        max_bid: Amount,
        auto_increment: Amount,
        entry_time: Optional[int] = None,
    ):
        """
        Create a bidder whose current bid starts at the starting bid.

        Args:
            id: Bidder identifier
            name: Bidder name
            starting_bid: Opening bid in currency units
            max_bid: Maximum bid in currency units
            auto_increment: Increment step in currency units
            entry_time: Entry timestamp (ns); defaults to time.time_ns()
        """
        self.id = id
        self.name = name
        self.starting_bid_cents = to_minor_units(starting_bid)
        self.max_bid_cents = to_minor_units(max_bid)
        self.auto_increment_cents = to_minor_units(auto_increment)
        self.current_bid_cents = self.starting_bid_cents
        self.is_active = True
        self.entry_time = time.time_ns() if entry_time is None else entry_time

    @property
    def starting_bid(self) -> Decimal:
        return to_decimal(self.starting_bid_cents)

    @property
    def max_bid(self) -> Decimal:
        return to_decimal(self.max_bid_cents)

    @property
    def auto_increment(self) -> Decimal:
        return to_decimal(self.auto_increment_cents)

    @property
    def current_bid(self) -> Decimal:
        return to_decimal(self.current_bid_cents)

    def can_increment(self) -> bool:
        """Check whether one more full increment fits under the maximum."""
        return (
            self.is_active
            and self.current_bid_cents + self.auto_increment_cents <= self.max_bid_cents
        )

    def increment(self) -> bool:
        """
        Raise the current bid by one auto-increment step.

        Reaching the maximum clamps the bid to max_bid and deactivates the
        bidder.

        Returns:
            True if the bid was raised, False if no increment was possible
        """
        if not self.can_increment():
            return False

        self.current_bid_cents += self.auto_increment_cents
        if self.current_bid_cents >= self.max_bid_cents:
            self.current_bid_cents = self.max_bid_cents
            self.is_active = False
        return True

    def renormalized(self) -> "Bidder":
        """
        Fresh bidder re-derived from this bidder's amounts.

        Keeps id, name and entry time; current bid is reset to the starting
        bid and the bidder is active again.
        """
        return Bidder(
            self.id,
            self.name,
            self.starting_bid,
            self.max_bid,
            self.auto_increment,
            entry_time=self.entry_time,
        )

    def copy(self) -> "Bidder":
        """Copy including the current bidding state."""
        clone = self.renormalized()
        clone.current_bid_cents = self.current_bid_cents
        clone.is_active = self.is_active
        return clone

    def frozen(self) -> "Bidder":
        """
        Read-only copy including the current bidding state.

        Any later assignment, including through increment(), raises
        AttributeError.
        """
        clone = self.copy()
        object.__setattr__(clone, "_frozen", True)
        return clone

    @property
    def is_frozen(self) -> bool:
        return getattr(self, "_frozen", False)

    def __setattr__(self, name: str, value: Any) -> None:
        if self.is_frozen:
            raise AttributeError(f"Bidder {self.id} is a read-only snapshot")
        super().__setattr__(name, value)

    @classmethod
    def from_dict(cls, data: Dict[str, Any], default_entry_time: Optional[int] = None) -> "Bidder":
        """
        Build a bidder from a plain record (e.g. parsed JSON).

        Amounts may be numbers or numeric strings. A record without
        entry_time gets default_entry_time (or the current time).

        Raises:
            ValueError: If a required key is missing or an amount is invalid
        """
        missing = [
            key for key in ("id", "name", "starting_bid", "max_bid", "auto_increment")
            if key not in data
        ]
        if missing:
            raise ValueError(f"Bidder record missing fields: {', '.join(missing)}")

        entry_time = data.get("entry_time", default_entry_time)
        # null id/name stay blank so validation rejects them
        return cls(
            "" if data["id"] is None else str(data["id"]),
            "" if data["name"] is None else str(data["name"]),
            data["starting_bid"],
            data["max_bid"],
            data["auto_increment"],
            entry_time=int(entry_time) if entry_time is not None else None,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to dictionary (amounts as two-decimal strings)"""
        return {
            "id": self.id,
            "name": self.name,
            "starting_bid": f"{self.starting_bid:.2f}",
            "max_bid": f"{self.max_bid:.2f}",
            "auto_increment": f"{self.auto_increment:.2f}",
            "current_bid": f"{self.current_bid:.2f}",
            "is_active": self.is_active,
            "entry_time": self.entry_time,
        }

    def __repr__(self) -> str:
        return (
            f"Bidder(id={self.id!r}, name={self.name!r}, "
            f"current_bid={self.current_bid}, max_bid={self.max_bid}, "
            f"is_active={self.is_active})"
        )
