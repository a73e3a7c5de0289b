"""
Auction module: proxy bidding resolution.
"""

from .bidder import Bidder
from .config import AuctionConfig
from .engine import BiddingEngine
from .errors import AuctionError, ErrorType, ValidationIssue
from .precision import to_minor_units, to_decimal, format_amount
from .result import AuctionResult
from .service import AuctionService
from .validation import BidValidator

__all__ = [
    "Bidder",
    "AuctionConfig",
    "BiddingEngine",
    "AuctionError",
    "ErrorType",
    "ValidationIssue",
    "to_minor_units",
    "to_decimal",
    "format_amount",
    "AuctionResult",
    "AuctionService",
    "BidValidator",
]
