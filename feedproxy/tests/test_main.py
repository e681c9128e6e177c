"""Unit tests for the inspector CLI."""

import json
import logging
from pathlib import Path

import pytest

from feedproxy.main import main, parse_node_names

GRAPH = {
    "nodes": [
        {"name": "usdc_feed", "kind": "mock_aggregator", "args": [8, 99_910_000, 1700000000]},
        {"name": "usdc_usd", "kind": "normalized", "args": ["$usdc_feed", 1]},
        {"name": "usdc_usd_8", "kind": "scaled", "args": ["$usdc_usd", 8]},
        {"name": "usd_usdc_bad", "kind": "mock", "args": [1, 0, 1700000000]},
        {"name": "usdc_usd_bad", "kind": "inverse", "args": ["$usd_usdc_bad"]},
    ]
}


@pytest.fixture
def graph_path(tmp_path: Path) -> Path:
    path = tmp_path / "graph.json"
    path.write_text(json.dumps(GRAPH))
    return path


class TestParseNodeNames:
    """Test node name parsing."""

    def test_parses_list(self) -> None:
        assert parse_node_names("a, b,,c ") == ["a", "b", "c"]

    def test_empty(self) -> None:
        assert parse_node_names(None) == []
        assert parse_node_names("") == []


class TestMain:
    """Test the CLI entry point."""

    def test_reads_selected_nodes(
        self,
        graph_path: Path,
        monkeypatch: pytest.MonkeyPatch,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        """Selected nodes should be logged with their legacy answers."""
        monkeypatch.setattr(
            "sys.argv", ["feedproxy", "--graph", str(graph_path), "--node", "usdc_usd_8"]
        )
        with caplog.at_level(logging.INFO):
            main()
        assert "answer=99910000 decimals=8" in caplog.text

    def test_failing_node_exits(
        self,
        graph_path: Path,
        monkeypatch: pytest.MonkeyPatch,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        """A node that cannot be read should make the CLI exit with 1."""
        monkeypatch.delenv("NODE", raising=False)
        monkeypatch.setattr("sys.argv", ["feedproxy", "--graph", str(graph_path)])
        with caplog.at_level(logging.INFO), pytest.raises(SystemExit) as exc_info:
            main()
        assert exc_info.value.code == 1
        assert "answer=999100000000000000 decimals=18" in caplog.text
        assert "Cannot invert non-positive value 0" in caplog.text

    def test_unknown_node(self, graph_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Unknown node names should be rejected."""
        monkeypatch.setattr(
            "sys.argv", ["feedproxy", "--graph", str(graph_path), "--node", "eth_usd"]
        )
        with pytest.raises(SystemExit) as exc_info:
            main()
        assert exc_info.value.code == 2

    def test_missing_graph(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """A graph file is required."""
        monkeypatch.delenv("GRAPH", raising=False)
        monkeypatch.setattr("sys.argv", ["feedproxy"])
        with pytest.raises(SystemExit) as exc_info:
            main()
        assert exc_info.value.code == 2

    def test_graph_build_error_exits(
        self,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        """A node wired to the wrong kind of input should be logged and exit with 1."""
        path = tmp_path / "bad_graph.json"
        path.write_text(
            json.dumps(
                {
                    "nodes": [
                        {"name": "eth_usd", "kind": "mock", "args": [1, {"ether": "2000"}, 1]},
                        {"name": "eth_usd_8", "kind": "scaled", "args": ["$eth_usd", 8]},
                        {"name": "usd_eth_8", "kind": "inverse", "args": ["$eth_usd_8"]},
                    ]
                }
            )
        )
        monkeypatch.setattr("sys.argv", ["feedproxy", "--graph", str(path), "--node", "eth_usd"])
        with pytest.raises(SystemExit) as exc_info:
            main()
        assert exc_info.value.code == 1
        assert "Failed to build graph" in caplog.text
        assert "usd_eth_8" in caplog.text

    def test_negative_amount_graph(
        self,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        """Negative ether amounts should build and read."""
        path = tmp_path / "negative.json"
        path.write_text(
            json.dumps({"nodes": [{"name": "spread", "kind": "mock", "args": [1, {"ether": "-1.5"}, 1]}]})
        )
        monkeypatch.setattr("sys.argv", ["feedproxy", "--graph", str(path), "--node", "spread"])
        with caplog.at_level(logging.INFO):
            main()
        assert "answer=-1500000000000000000 decimals=18" in caplog.text
