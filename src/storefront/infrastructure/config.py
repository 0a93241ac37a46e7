from __future__ import annotations

import os
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from pathlib import Path

from dotenv import load_dotenv


def _get_env(*keys: str, default: str | None = None) -> str | None:
    for k in keys:
        v = os.getenv(k)
        if v is not None and str(v).strip() != "":
            return v.strip()
    return default


def _get_int(*keys: str, default: int) -> int:
    v = _get_env(*keys)
    if v is None:
        return default
    try:
        return int(v)
    except ValueError as exc:
        raise ValueError(f"{keys[0]} must be an integer, got {v!r}") from exc


def _get_float(*keys: str, default: float) -> float:
    v = _get_env(*keys)
    if v is None:
        return default
    try:
        return float(v)
    except ValueError as exc:
        raise ValueError(f"{keys[0]} must be a number, got {v!r}") from exc


def _get_decimal(*keys: str, default: str) -> Decimal:
    v = _get_env(*keys, default=default)
    try:
        return Decimal(v)
    except InvalidOperation as exc:
        raise ValueError(f"{keys[0]} must be a decimal number, got {v!r}") from exc


@dataclass(frozen=True)
class Settings:
    data_dir: Path
    redis_url: str | None
    redis_host: str
    redis_port: int
    redis_username: str | None
    redis_password: str | None
    redis_socket_timeout: float
    login_max_attempts: int
    login_block_seconds: int
    login_window_seconds: int
    tax_rate: Decimal
    free_shipping_threshold: Decimal
    flat_shipping: Decimal
    log_level: str


def load_settings(env_file: Path | None = None) -> Settings:
    """Read settings from the environment, after loading ``.env`` if present.

    Variables already set in the environment win over the file. Relative
    defaults (``.env``, ``data/``) resolve against the working directory.
    """
    base_dir = Path.cwd()
    load_dotenv(dotenv_path=env_file or base_dir / ".env")

    return Settings(
        data_dir=Path(_get_env("STOREFRONT_DATA_DIR", default=str(base_dir / "data"))),
        redis_url=_get_env("REDIS_URL"),
        redis_host=_get_env("REDIS_HOST", default="localhost") or "localhost",
        redis_port=_get_int("REDIS_PORT", default=6379),
        redis_username=_get_env("REDIS_USERNAME"),
        redis_password=_get_env("REDIS_PASSWORD"),
        redis_socket_timeout=_get_float("REDIS_SOCKET_TIMEOUT", default=0.5),
        login_max_attempts=_get_int("LOGIN_MAX_ATTEMPTS", default=5),
        login_block_seconds=_get_int("LOGIN_BLOCK_SECONDS", default=15 * 60),
        login_window_seconds=_get_int("LOGIN_WINDOW_SECONDS", default=15 * 60),
        tax_rate=_get_decimal("TAX_RATE", default="0.085"),
        free_shipping_threshold=_get_decimal("FREE_SHIPPING_THRESHOLD", default="75.00"),
        flat_shipping=_get_decimal("FLAT_SHIPPING", default="9.99"),
        log_level=(_get_env("LOG_LEVEL", default="WARNING") or "WARNING").upper(),
    )
