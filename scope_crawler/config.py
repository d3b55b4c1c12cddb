"""
Модуль для загрузки и валидации конфигурации краулера ScopeCrawler.
Используется Pydantic для описания схемы и проверки данных.
"""
from __future__ import annotations

import json
import os
import errno
from pathlib import Path
from typing import Any, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator


class CrawlerConfig(BaseModel):
    """Конфигурация для одного запуска обхода."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    base_url: str = Field("https://note.com", description="Стартовый URL; он же префикс области обхода.")
    max_depth: int = Field(2, ge=0, description="Максимальная глубина обхода ссылок.")
    output_dir: Path = Field(Path("./data"), description="Каталог для результатов запусков.")
    worker_limit: int = Field(10, ge=1, description="Максимум одновременных загрузок.")
    timeout: float = Field(10.0, gt=0, description="Таймаут на один запрос (секунд).")
    link_delay: float = Field(1.0, ge=0, description="Пауза перед запуском каждой дочерней задачи (секунд).")
    user_agent: str = Field("ScopeCrawler/0.1", min_length=1, description="Заголовок User-Agent.")

    @field_validator("base_url")
    @classmethod
    def _check_scheme(cls, v: str) -> str:
        # строка сохраняется как есть: она используется как буквальный префикс
        if not v.startswith(("http://", "https://")):
            raise ValueError("base_url must start with http:// or https://")
        return v

    def override(self, **values: Any) -> CrawlerConfig:
        """Возвращает проверенную копию с заменой заданных (не None) полей."""
        updates = {k: v for k, v in values.items() if v is not None}
        if not updates:
            return self
        return CrawlerConfig(**{**self.model_dump(), **updates})


_DEFAULT_CFG = Path("configs/default.yaml")


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Неправильный YAML в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень YAML должен быть mapping, получено {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Неправильный JSON в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень JSON должен быть mapping, получено {type(data).__name__}")
    return data


def load_config(path: Union[str, Path, None] = None) -> CrawlerConfig:
    """
    Читает YAML или JSON и возвращает проверенный объект CrawlerConfig.
    Без пути берёт configs/default.yaml, а если его нет, значения по умолчанию.
    Явно указанный, но отсутствующий файл даёт FileNotFoundError.
    """
    if path is None:
        if not _DEFAULT_CFG.exists():
            return CrawlerConfig()
        path_obj = _DEFAULT_CFG
    else:
        path_obj = Path(path).expanduser().resolve()
        if not path_obj.is_file():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        data = _read_yaml(path_obj)
    elif suffix == ".json":
        data = _read_json(path_obj)
    else:
        raise ValueError(f"Неподдерживаемый формат конфига: {suffix}")

    return CrawlerConfig(**data)
