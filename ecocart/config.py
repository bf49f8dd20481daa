from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ROOT_DIR = Path(__file__).resolve().parents[1]  # .../ecocart project root
load_dotenv(dotenv_path=ROOT_DIR / ".env")

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def _get_env(*keys: str, default: str | None = None) -> str | None:
    for k in keys:
        v = os.getenv(k)
        if v is not None and str(v).strip() != "":
            return v.strip()
    return default


def _get_int(*keys: str, default: int | None = None) -> int | None:
    v = _get_env(*keys, default=None)
    if v is None:
        return default
    return int(v)


def _get_float(*keys: str, default: float | None = None) -> float | None:
    v = _get_env(*keys, default=None)
    if v is None:
        return default
    return float(v)


def _get_list(*keys: str, default: str) -> tuple[str, ...]:
    v = _get_env(*keys, default=default) or default
    return tuple(p.strip() for p in v.split(",") if p.strip())


@dataclass(frozen=True)
class Settings:
    catalog_url: str
    catalog_timeout: float
    currency: str
    decimals: int
    random_seed: int | None
    cors_origins: tuple[str, ...]
    log_level: str
    bot_token: str


def load_settings() -> Settings:
    return Settings(
        catalog_url=(_get_env("CATALOG_URL", default="https://fakestoreapi.com") or "").rstrip("/"),
        catalog_timeout=_get_float("CATALOG_TIMEOUT", default=5.0) or 5.0,
        currency=_get_env("CURRENCY", default="USD") or "USD",
        decimals=_get_int("DECIMALS", default=2),
        random_seed=_get_int("RANDOM_SEED", default=None),
        cors_origins=_get_list("CORS_ORIGINS", default="*"),
        log_level=(_get_env("LOG_LEVEL", default="INFO") or "INFO").upper(),
        bot_token=_get_env("BOT_TOKEN", "TELEGRAM_BOT_TOKEN", default="") or "",
    )


settings = load_settings()


def setup_logging(level: str | None = None) -> None:
    logging.basicConfig(
        level=level or settings.log_level,
        format=LOG_FORMAT,
    )
