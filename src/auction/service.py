"""
Auction Service: validate bidders, then run the bidding engine.
"""

import logging
from typing import Optional, Sequence

from .bidder import Bidder
from .config import AuctionConfig
from .engine import BiddingEngine
from .errors import AuctionError, ErrorType
from .result import AuctionResult
from .validation import BidValidator

logger = logging.getLogger(__name__)

SERVICE_NAME = "AuctionService"


class AuctionService:
    """
    Entry point for resolving an auction.

    Validation failures and engine failures surface as AuctionError with the
    stage recorded in the error's operation.
    """

    def __init__(
        self,
        validator: Optional[BidValidator] = None,
        engine: Optional[BiddingEngine] = None,
        config: Optional[AuctionConfig] = None,
    ):
        """
        Initialize auction service.

        Args:
            validator: Bid validator (default BidValidator)
            engine: Bidding engine (default BiddingEngine built from config)
            config: Auction configuration used for the default engine
        """
        self.config = config or AuctionConfig()
        self.validator = validator or BidValidator()
        self.engine = engine or BiddingEngine(self.config)

    def determine_winner(self, bidders: Sequence[Bidder]) -> AuctionResult:
        """
        Validate all bidders and resolve the auction.

        Args:
            bidders: Auction participants

        Returns:
            AuctionResult for the auction

        Raises:
            AuctionError: VALIDATION for rejected input, TIMEOUT or INTERNAL
                for engine failures
        """
        try:
            self.validator.validate_bidders(bidders)
        except AuctionError as e:
            raise self._annotate(e, "determine_winner.validation")
        except Exception as e:
            error = AuctionError(ErrorType.VALIDATION, "unexpected validation error")
            raise self._annotate(error, "determine_winner.validation") from e

        try:
            result = self.engine.process_bids(bidders)
        except AuctionError as e:
            raise self._annotate(e, "determine_winner.processing")
        except Exception as e:
            error = AuctionError(ErrorType.INTERNAL, "unexpected processing error")
            raise self._annotate(error, "determine_winner.processing") from e

        if result is None:
            error = AuctionError(ErrorType.INTERNAL, "failed to process bids: result is None")
            error.add_context("bidder_count", len(bidders))
            raise self._annotate(error, "determine_winner.result_validation")

        return result

    def _annotate(self, error: AuctionError, operation: str) -> AuctionError:
        if error.operation:
            error.add_context("failed_operation", error.operation)
        error.with_operation(operation)
        error.add_context("service", SERVICE_NAME)
        logger.warning(f"{SERVICE_NAME} failed: {error}")
        return error
