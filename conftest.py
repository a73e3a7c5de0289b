"""
Pytest configuration for the auction test suite.

Adds --stress flag for running the large bidder-set tests at full size.
"""

import os
import sys

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "src"))


def pytest_addoption(parser):
    """Add custom command line options"""
    parser.addoption(
        "--stress",
        action="store_true",
        default=False,
        help="Run large bidder-set tests at stress size"
    )


def pytest_configure(config):
    """Configure pytest based on command line options"""
    config.addinivalue_line(
        "markers", "stress: tests whose size grows under --stress"
    )
    if config.getoption("--stress"):
        print("\nSTRESS MODE ENABLED - large auctions\n")


@pytest.fixture(scope="session")
def stress_mode(request):
    """Fixture that provides stress mode status"""
    return request.config.getoption("--stress")


@pytest.fixture
def make_bidders():
    """
    Factory for bidders with explicit, increasing entry times.

    Usage:
        make_bidders(("a", 10, 20, 1), ("b", 12, 18, 2))
    """
    from auction import Bidder

    def _make(*specs):
        return [
            Bidder(bidder_id, bidder_id.title(), start, maximum, step, entry_time=index)
            for index, (bidder_id, start, maximum, step) in enumerate(specs)
        ]

    return _make
