"""scope_crawler.report: JSONL-вывод результатов обхода и каталог запуска."""

from __future__ import annotations

from scope_crawler.report.jsonl import CONFIG_FILE, OUTPUT_FILE, JsonlSink, create_run_dir

__all__ = ["JsonlSink", "create_run_dir", "OUTPUT_FILE", "CONFIG_FILE"]
