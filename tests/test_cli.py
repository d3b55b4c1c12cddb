"""Тесты для CLI (`scope_crawler/cli.py`) с использованием click.testing.CliRunner.
Проверяют команды `crawl`, `config`, `--version`, а также обработку ошибок.
"""
import json
from datetime import timedelta
from pathlib import Path

import pytest
import scope_crawler.cli as cli_module
from click.testing import CliRunner
from scope_crawler.cli import cli
from scope_crawler.crawler.models import RunConfig
from scope_crawler.errors import FatalSetupError


@pytest.fixture()
def captured(monkeypatch):
    """Патчим start_crawl: запоминаем конфиг и возвращаем фиктивный RunConfig."""
    seen = {}

    async def fake_crawl(cfg):
        seen["config"] = cfg
        return RunConfig(
            cfg.base_url, cfg.max_depth, timedelta(milliseconds=3), run_dir=Path("out") / "2024-0101-0000",
        )

    monkeypatch.setattr(cli_module, "start_crawl", fake_crawl)
    return seen


def test_version_option():
    runner = CliRunner()
    result = runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert "ScopeCrawler" in result.output


def test_show_config(tmp_path):
    cfg_file = tmp_path / "crawler.json"
    cfg_file.write_text(json.dumps({"base_url": "https://example.com", "max_depth": 1}), encoding="utf-8")

    runner = CliRunner()
    result = runner.invoke(cli, ["--config", str(cfg_file), "config"])
    assert result.exit_code == 0
    data = json.loads(result.output)
    assert data["base_url"] == "https://example.com"
    assert data["max_depth"] == 1


def test_crawl_overrides(captured, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    runner = CliRunner()
    result = runner.invoke(
        cli,
        ["crawl", "--start-url", "https://a.test/x", "--maxDepth", "0",
         "--output-dir", str(tmp_path / "out"), "--workers", "3", "--link-delay", "0"],
    )
    assert result.exit_code == 0, result.output
    cfg = captured["config"]
    assert cfg.base_url == "https://a.test/x"
    assert cfg.max_depth == 0
    assert cfg.worker_limit == 3
    assert cfg.link_delay == 0
    assert f"Run directory: {Path('out') / '2024-0101-0000'}" in result.output
    summary = json.loads(result.output.strip().splitlines()[-1])
    assert summary == {"base_url": "https://a.test/x", "max_depth": 0, "time": 3_000_000}


def test_crawl_rejects_invalid_option(captured, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    runner = CliRunner()
    result = runner.invoke(cli, ["crawl", "--startURL", "ftp://a.test"])
    assert result.exit_code == 1
    assert "config" not in captured


def test_crawl_setup_error(monkeypatch, tmp_path):
    async def broken(cfg):
        raise FatalSetupError("cannot create run directory")

    monkeypatch.setattr(cli_module, "start_crawl", broken)
    monkeypatch.chdir(tmp_path)
    runner = CliRunner()
    result = runner.invoke(cli, ["crawl"])
    assert result.exit_code == 1
    assert "cannot create run directory" in result.output


def test_bad_config_file(tmp_path):
    cfg_file = tmp_path / "crawler.yaml"
    cfg_file.write_text("max_depth: -3\n", encoding="utf-8")
    runner = CliRunner()
    result = runner.invoke(cli, ["--config", str(cfg_file), "config"])
    assert result.exit_code == 1
