"""
Tests for src/report_cli.py — text summary and JSON export.
"""
import json

from src.report_cli import render_summary, main


class TestRenderSummary:

    def test_gas_pool_section(self, agora_data, fixed_now):
        text = render_summary(agora_data, fixed_now)
        assert "7,500 SOL" in text
        assert "(25%)" in text
        assert "75K users" in text

    def test_proposals_listed(self, agora_data, fixed_now):
        text = render_summary(agora_data, fixed_now)
        assert "AGP-47" in text
        assert "3d 0h" in text
        assert "not scheduled" in text
        assert "68/22/10" in text

    def test_sanctions_as_percent(self, agora_data, fixed_now):
        text = render_summary(agora_data, fixed_now)
        assert "XYZ  10%" in text
        assert "47d 0h" in text


class TestMain:

    def test_prints_summary(self, capsys):
        assert main([]) == 0
        assert "Gas pool" in capsys.readouterr().out

    def test_json_to_file(self, tmp_path):
        out = tmp_path / "snapshot.json"
        assert main(["--json", "--output", str(out)]) == 0
        payload = json.loads(out.read_text(encoding="utf-8"))
        assert payload["proposals"]["total_count"] == 47
