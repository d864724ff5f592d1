"""Tests for the command-line catalog browser."""

import pytest

import config
import main
from src.model_providers.config import ProviderId


class TestBuildRegistry:
    """Test registry construction from config."""

    def test_uses_delay_scale(self):
        registry = main.build_registry()
        for pid in ProviderId:
            assert registry.get_config(pid).latency_seconds == 0.0

    def test_uses_failure_rates(self, monkeypatch):
        monkeypatch.setattr(config, "FAILURE_RATES", {"deepseek": 0.5})
        registry = main.build_registry()
        assert registry.get_config(ProviderId.DEEPSEEK).failure_rate == 0.5
        assert registry.get_config(ProviderId.OPENAI).failure_rate == 0.0


class TestFormatting:
    """Test table and badge formatting."""

    def test_badge_lines_wrap(self):
        lines = main.format_badge_lines(["Text", "Image", "Audio"], 15)
        assert lines == ["[Text] [Image]", "[Audio]"]

    def test_badge_lines_fit_width(self):
        labels = ["Text", "Image", "Audio", "Video", "Multi-Modal", "Embedding"]
        for line in main.format_badge_lines(labels, 20):
            assert len(line) <= 20 or line.count("[") == 1

    def test_badge_lines_empty(self):
        assert main.format_badge_lines([], 40) == []

    def test_table_omits_absent_popularity(self, make_record):
        table = main.format_catalog_table([make_record("m", display_name="Mystery")])
        row = next(line for line in table.splitlines() if line.startswith("Mystery"))
        assert "0%" not in row
        assert "-" in row


class TestMain:
    """Test the end-to-end CLI."""

    def test_search_filter_and_sort(self, capsys):
        code = main.main([
            "--provider", "deepseek", "--search", "coder",
            "--capability", "text", "--sort", "name",
        ])
        out = capsys.readouterr().out
        assert code == 0
        assert "MODEL CATALOG - DeepSeek" in out
        assert "DeepSeek-Coder-V2-Instruct" in out
        assert "DeepSeek-R1" not in out
        assert "[Text] [Code]" in out

    def test_default_provider(self, capsys):
        assert main.main([]) == 0
        out = capsys.readouterr().out
        assert "MODEL CATALOG - OpenAI" in out
        assert "GPT-4o" in out

    def test_no_matches(self, capsys):
        assert main.main(["--provider", "llama", "--search", "no-such-model"]) == 0
        assert "No models match" in capsys.readouterr().out

    def test_fetch_failure(self, capsys, monkeypatch):
        monkeypatch.setattr(config, "FAILURE_RATES", {"gemini": 1.0})
        code = main.main(["--provider", "gemini"])
        captured = capsys.readouterr()
        assert code == 1
        assert "Could not load models." in captured.out
        assert "Error: Network error" in captured.err

    def test_refresh(self, capsys):
        assert main.main(["--provider", "gemini", "--refresh"]) == 0
        assert "Gemini 2.0 Flash" in capsys.readouterr().out

    def test_rejects_unknown_provider(self):
        with pytest.raises(SystemExit):
            main.main(["--provider", "anthropic"])
