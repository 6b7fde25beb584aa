"""Tests for the command-line interface."""

import json
from unittest.mock import Mock, patch

import pytest

from trustpulse.cli import build_parser, main


class TestParser:

    def test_search(self):
        args = build_parser().parse_args(["search", "iPhone 15", "--out", "x.json"])
        assert (args.command, args.query, args.out) == ("search", "iPhone 15", "x.json")

    def test_directory_defaults(self):
        args = build_parser().parse_args(["directory"])
        assert args.term == ""
        assert args.category == "All"
        assert args.live is None

    def test_directory_rejects_unknown_category(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["directory", "--category", "Pets"])


class TestCommands:

    def test_search_exports(self, tmp_path, product_payload, capsys):
        llm = Mock()
        llm.chat.return_value = "product"
        llm.generate_json.return_value = product_payload
        out = tmp_path / "search.json"

        with patch("trustpulse.app.LLMServiceFactory.create", return_value=llm):
            main(["search", "iPhone 15", "--out", str(out)])

        printed = capsys.readouterr().out
        assert "iPhone 15" in printed
        assert "best value" in printed
        saved = json.loads(out.read_text(encoding="utf-8"))
        assert saved["kind"] == "product"
        assert saved["insight"]["name"] == "iPhone 15"

    def test_search_without_result(self, capsys):
        llm = Mock()
        llm.chat.return_value = "product"
        llm.generate_json.return_value = None

        with patch("trustpulse.app.LLMServiceFactory.create", return_value=llm):
            main(["search", "qwzx"])

        assert "No insight found" in capsys.readouterr().out

    def test_directory_filter(self, capsys):
        main(["directory", "--term", "dent"])
        printed = capsys.readouterr().out
        assert "Lumina Dental" in printed
        assert "EcoTech" not in printed

    def test_export_pretty(self, tmp_path, capsys):
        src = tmp_path / "in.json"
        src.write_text('{"query": "Nike"}', encoding="utf-8")

        main(["export", "--in", str(src), "--pretty"])

        assert '"query": "Nike"' in capsys.readouterr().out

    def test_unexpected_error_exits(self):
        with patch("trustpulse.cli.TrustPulseApp", side_effect=RuntimeError("boom")):
            with pytest.raises(SystemExit):
                main(["search", "iPhone 15"])
