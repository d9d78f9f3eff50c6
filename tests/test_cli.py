"""Tests for CLI argument parsing."""

import json
from unittest.mock import patch

import pytest

from cli import build_config, create_parser, main


class TestParser:
    """Test create_parser()."""

    def test_defaults(self):
        args = create_parser().parse_args([])
        assert args.base_url is None
        assert args.resource is None
        assert not args.list_resources

    def test_page_size_choices(self, capsys):
        with pytest.raises(SystemExit):
            create_parser().parse_args(["--page-size", "7"])

    def test_overrides(self):
        args = create_parser().parse_args(
            ["--base-url", "https://lgu.example/", "--timeout", "5", "--page-size", "25"]
        )
        assert args.base_url == "https://lgu.example/"
        assert args.timeout == 5.0
        assert args.page_size == 25


class TestBuildConfig:
    """Test build_config()."""

    def test_flags_beat_file(self, tmp_path, monkeypatch):
        monkeypatch.delenv("CIVIC_CONSOLE_BASE_URL", raising=False)
        monkeypatch.delenv("CIVIC_CONSOLE_TIMEOUT", raising=False)
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"base_url": "https://file.example/", "page_size": 50}))
        args = create_parser().parse_args(
            ["--config", str(path), "--base-url", "https://flag.example/"]
        )
        config = build_config(args)
        assert config.base_url == "https://flag.example/"
        assert config.page_size == 50

    def test_warnings_printed(self, tmp_path, monkeypatch, capsys):
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
        monkeypatch.delenv("CIVIC_CONSOLE_BASE_URL", raising=False)
        monkeypatch.delenv("CIVIC_CONSOLE_TIMEOUT", raising=False)
        build_config(create_parser().parse_args(["--base-url", "http://lgu.example/"]))
        assert "not using HTTPS" in capsys.readouterr().err


class TestMain:
    """Test main() exits."""

    def test_list_resources(self, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["--list-resources"])
        assert exc.value.code == 0
        out = capsys.readouterr().out
        assert "officials" in out
        assert "php_folder/manageAccomplishmentReports.php" in out

    def test_unknown_resource(self, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["--resource", "parking"])
        assert exc.value.code == 1
        assert "Unknown resource 'parking'" in capsys.readouterr().err

    def test_invalid_config(self, capsys, monkeypatch, tmp_path):
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
        monkeypatch.delenv("CIVIC_CONSOLE_BASE_URL", raising=False)
        monkeypatch.delenv("CIVIC_CONSOLE_TIMEOUT", raising=False)
        with pytest.raises(SystemExit) as exc:
            main(["--base-url", "ftp://lgu.example/"])
        assert exc.value.code == 1
        assert "Invalid configuration" in capsys.readouterr().err

    def test_runs_app(self, monkeypatch, tmp_path):
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
        monkeypatch.delenv("CIVIC_CONSOLE_BASE_URL", raising=False)
        monkeypatch.delenv("CIVIC_CONSOLE_TIMEOUT", raising=False)
        with patch("app.CivicConsole.run") as run:
            main(["--resource", "services"])
        run.assert_called_once()
