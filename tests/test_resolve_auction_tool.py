"""
Tests for the resolve_auction command-line tool.
"""

import sys
import os
import json

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "tools"))

import pytest
import resolve_auction


AUCTION = {
    "bidders": [
        {"id": "sasha", "name": "Sasha", "starting_bid": 50, "max_bid": 80, "auto_increment": 3},
        {"id": "john", "name": "John", "starting_bid": "60.00", "max_bid": "82.00", "auto_increment": "2.00"},
        {"id": "pat", "name": "Pat", "starting_bid": 55, "max_bid": 85, "auto_increment": 5},
    ]
}


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("AUCTION_MAX_ROUNDS", "AUCTION_LOG_LEVEL", "AUCTION_TRACING_ENABLED"):
        monkeypatch.delenv(name, raising=False)


def _write(tmp_path, document, name="auction.json"):
    path = tmp_path / name
    path.write_text(json.dumps(document))
    return str(path)


class TestLoadBidders:
    """Test input parsing"""

    def test_object_document(self):
        bidders = resolve_auction.load_bidders(AUCTION)

        assert [b.id for b in bidders] == ["sasha", "john", "pat"]
        assert [b.entry_time for b in bidders] == [0, 1, 2]

    def test_bare_list(self):
        bidders = resolve_auction.load_bidders(AUCTION["bidders"][:1])
        assert bidders[0].max_bid_cents == 8000

    def test_explicit_entry_time_kept(self):
        record = dict(AUCTION["bidders"][0], entry_time=99)
        assert resolve_auction.load_bidders([record])[0].entry_time == 99

    @pytest.mark.parametrize("document", [{"bidders": "nope"}, 42, [1, 2]])
    def test_bad_shape(self, document):
        with pytest.raises(ValueError):
            resolve_auction.load_bidders(document)


class TestMain:
    """Test exit codes and output"""

    def test_resolves_auction(self, tmp_path, capsys):
        exit_code = resolve_auction.main([_write(tmp_path, AUCTION)])

        assert exit_code == 0
        output = json.loads(capsys.readouterr().out)
        assert output["winner"]["id"] == "sasha"
        assert output["winning_bid"] == "80.00"
        assert output["bidding_rounds"] == 15

    def test_validation_failure(self, tmp_path, capsys):
        document = {"bidders": [dict(AUCTION["bidders"][0], auto_increment=0)]}

        exit_code = resolve_auction.main([_write(tmp_path, document)])

        assert exit_code == 1
        error = json.loads(capsys.readouterr().out)["error"]
        assert error["type"] == "validation"
        assert error["operation"] == "determine_winner.validation"
        assert error["details"][0]["field"] == "auto_increment"

    def test_timeout_with_round_cap(self, tmp_path, capsys):
        exit_code = resolve_auction.main([_write(tmp_path, AUCTION), "--max-rounds", "3"])

        assert exit_code == 1
        error = json.loads(capsys.readouterr().out)["error"]
        assert error["type"] == "timeout"
        assert error["context"]["max_rounds"] == "3"

    def test_missing_file(self, tmp_path):
        assert resolve_auction.main([str(tmp_path / "missing.json")]) == 2

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json")
        assert resolve_auction.main([str(path)]) == 2

    def test_missing_fields(self, tmp_path):
        document = {"bidders": [{"id": "a", "name": "A"}]}
        assert resolve_auction.main([_write(tmp_path, document)]) == 2

    def test_rejects_zero_round_cap(self, tmp_path):
        with pytest.raises(SystemExit) as exc_info:
            resolve_auction.main([_write(tmp_path, AUCTION), "--max-rounds", "0"])
        assert exc_info.value.code == 2

    def test_null_identity_rejected(self, tmp_path, capsys):
        document = {"bidders": [dict(AUCTION["bidders"][0], id=None, name=None)]}

        exit_code = resolve_auction.main([_write(tmp_path, document)])

        assert exit_code == 1
        error = json.loads(capsys.readouterr().out)["error"]
        assert error["type"] == "validation"
        assert {d["field"] for d in error["details"]} == {"id", "name"}

    def test_boolean_amount_rejected(self, tmp_path):
        document = {"bidders": [dict(AUCTION["bidders"][0], starting_bid=True)]}
        assert resolve_auction.main([_write(tmp_path, document)]) == 2

    @pytest.mark.parametrize("value", ["abc", "0"])
    def test_bad_round_cap_in_environment(self, tmp_path, monkeypatch, value):
        monkeypatch.setenv("AUCTION_MAX_ROUNDS", value)

        with pytest.raises(SystemExit) as exc_info:
            resolve_auction.main([_write(tmp_path, AUCTION)])
        assert exc_info.value.code == 2

    def test_metrics_to_stderr(self, tmp_path, capsys):
        exit_code = resolve_auction.main([_write(tmp_path, AUCTION), "--metrics"])

        assert exit_code == 0
        assert "proxy_auction_resolved_total" in capsys.readouterr().err
