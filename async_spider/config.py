# === FILE: async_spider/config.py ===
"""
Модуль для загрузки и валидации конфигурации обходчика AsyncSpider.
Используется Pydantic для описания схемы и проверки данных.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Union

import yaml
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    HttpUrl,
    ValidationError,
)

DEFAULT_BASE_URL = "http://localhost:8080"
DEFAULT_START_PATH = "/"


class SpiderConfig(BaseModel):
    """Конфигурация для одного обхода графа ресурсов."""
    model_config = ConfigDict(extra="forbid", frozen=True, validate_default=True)

    base_url: HttpUrl = Field(DEFAULT_BASE_URL, description="Базовый адрес сервера.")
    start_path: str = Field(DEFAULT_START_PATH, min_length=1, description="Путь, с которого начинается обход.")
    request_timeout: float = Field(13.0, gt=0, description="Таймаут на один запрос (секунд).")
    connect_timeout: float = Field(5.0, gt=0, description="Таймаут установки соединения (секунд).")
    retry_times: int = Field(2, ge=0, description="Число повторных попыток при ошибках ввода-вывода.")
    crawl_timeout: float = Field(180.0, gt=0, description="Общий таймаут обхода (секунд).")
    poll_interval: float = Field(0.25, gt=0, description="Период проверки завершения обхода (секунд).")
    user_agent: str = Field("AsyncSpider/1.0", min_length=1, description="Заголовок User-Agent.")


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


def load_config(path: Union[str, Path, None] = None) -> SpiderConfig:
    """
    Читает YAML или JSON и возвращает проверенный объект SpiderConfig.
    Без пути возвращает конфигурацию по умолчанию.
    При отсутствии файла конфига бросает FileNotFoundError.
    """
    if path is None:
        return SpiderConfig()

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

    try:
        return SpiderConfig(**data)
    except ValidationError:
        raise


__all__ = ["SpiderConfig", "load_config", "DEFAULT_BASE_URL", "DEFAULT_START_PATH"]
