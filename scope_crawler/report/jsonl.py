# scope_crawler/report/jsonl.py

"""
Запись результатов обхода в формате JSON Lines.

Каждый вызов :meth:`JsonlSink.append` дописывает ровно один JSON-объект и
перевод строки. Запись сериализуется внутренним замком, так как страницы
пишут несколько задач одновременно.

Запись синхронная: `append` вызывается прямо в цикле событий и возвращает
управление только после `flush`, поэтому прерванный запуск теряет не больше
одной строки. Строка короткая, и цикл блокируется лишь на один буферизованный
write.
"""
from __future__ import annotations

import json
import threading
from datetime import datetime
from pathlib import Path
from typing import IO, Any, Mapping, Optional, Union

from scope_crawler.errors import FatalSetupError, WriteError

RUN_DIR_FORMAT = "%Y-%m%d-%H%M"
OUTPUT_FILE = "output.jsonl"
CONFIG_FILE = "config.jsonl"


def create_run_dir(output_dir: Union[str, Path], now: Optional[datetime] = None) -> Path:
    """
    Создаёт каталог запуска ``<output_dir>/<YYYY-MMDD-HHmm>``.

    :raises FatalSetupError: каталог уже существует или не может быть создан
    """
    stamp = (now or datetime.now()).strftime(RUN_DIR_FORMAT)
    run_dir = Path(output_dir) / stamp
    try:
        run_dir.mkdir(parents=True, exist_ok=False)
    except OSError as exc:
        raise FatalSetupError(f"cannot create run directory {run_dir}: {exc}") from exc
    return run_dir


class JsonlSink:
    """Потокобезопасный append-only JSONL-файл."""

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)
        self._lock = threading.Lock()
        try:
            self._fh: Optional[IO[str]] = self.path.open("a", encoding="utf-8")
        except OSError as exc:
            raise FatalSetupError(f"cannot open {self.path}: {exc}") from exc

    def append(self, record: Any) -> None:
        """
        Дописывает запись. Принимает mapping или объект с методом ``as_record()``.

        :raises WriteError: запись не сериализуется или файл недоступен
        """
        data = record if isinstance(record, Mapping) else record.as_record()
        try:
            line = json.dumps(data, ensure_ascii=False)
        except (TypeError, ValueError) as exc:
            raise WriteError(f"failed to marshal record for {self.path}: {exc}") from exc
        with self._lock:
            if self._fh is None:
                raise WriteError(f"sink {self.path} is closed")
            try:
                self._fh.write(line + "\n")
                self._fh.flush()
            except OSError as exc:
                raise WriteError(f"failed to write {self.path}: {exc}") from exc

    def close(self) -> None:
        with self._lock:
            if self._fh is not None:
                self._fh.close()
                self._fh = None

    def __enter__(self) -> JsonlSink:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
