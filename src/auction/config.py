"""
Auction configuration.

Defaults can be overridden through environment variables, see
AuctionConfig.from_env().
"""

import os
from dataclasses import dataclass
from typing import Optional

DEFAULT_MAX_ROUNDS = 1000


@dataclass
class AuctionConfig:
    """
    Settings for auction resolution.

    Attributes:
        max_rounds: Round cap for the bidding loop
        log_level: Logging level name used by the command-line tool
        tracing_enabled: Whether to install an OpenTelemetry tracer provider
        otlp_endpoint: OTLP collector endpoint (e.g. "http://localhost:4317")
        service_name: Service name reported on traces
    """

    max_rounds: int = DEFAULT_MAX_ROUNDS
    log_level: str = "INFO"
    tracing_enabled: bool = False
    otlp_endpoint: Optional[str] = None
    service_name: str = "proxy-auction"

    def __post_init__(self):
        if self.max_rounds < 1:
            raise ValueError(f"max_rounds must be at least 1, got {self.max_rounds}")

    @classmethod
    def from_env(cls) -> "AuctionConfig":
        """Create config from environment variables"""
        return cls(
            max_rounds=int(os.getenv("AUCTION_MAX_ROUNDS", str(DEFAULT_MAX_ROUNDS))),
            log_level=os.getenv("AUCTION_LOG_LEVEL", "INFO").upper(),
            tracing_enabled=os.getenv("AUCTION_TRACING_ENABLED", "false").lower() == "true",
            otlp_endpoint=os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT") or None,
            service_name=os.getenv("AUCTION_SERVICE_NAME", "proxy-auction"),
        )
