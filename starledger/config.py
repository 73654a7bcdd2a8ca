# starledger/config.py
import logging
from dataclasses import dataclass
from os import environ
from typing import Mapping, Optional

from starledger.chain.ownership import MESSAGE_TAG, VALIDATION_WINDOW_SECONDS
from starledger.core.types import GENESIS_DATA

ENV_PREFIX = "STARLEDGER_"

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


@dataclass(frozen=True)
class LedgerConfig:
    validation_window_seconds: int = VALIDATION_WINDOW_SECONDS
    message_tag: str = MESSAGE_TAG
    genesis_data: str = GENESIS_DATA
    log_level: str = "WARNING"

    def validate(self) -> None:
        if self.validation_window_seconds <= 0:
            raise ValueError("validation_window_seconds must be > 0")
        if not (self.message_tag or "").strip():
            raise ValueError("message_tag must be set")
        if ":" in self.message_tag:
            raise ValueError("message_tag must not contain ':'")
        if self.log_level.upper() not in _LOG_LEVELS:
            raise ValueError(f"Unknown log_level: {self.log_level}")

    @property
    def log_level_value(self) -> int:
        return getattr(logging, self.log_level.upper())


def _coerce_int(value: str, field: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Invalid integer for {field}: {value}") from exc


def _get_env(env: Mapping[str, str], key: str) -> Optional[str]:
    return env.get(f"{ENV_PREFIX}{key}")


def load_config(env: Optional[Mapping[str, str]] = None) -> LedgerConfig:
    source = environ if env is None else env

    window_raw = _get_env(source, "VALIDATION_WINDOW_SECONDS")
    window = (
        _coerce_int(window_raw, "validation_window_seconds")
        if window_raw is not None
        else LedgerConfig.validation_window_seconds
    )

    cfg = LedgerConfig(
        validation_window_seconds=window,
        message_tag=_get_env(source, "MESSAGE_TAG") or LedgerConfig.message_tag,
        genesis_data=_get_env(source, "GENESIS_DATA") or LedgerConfig.genesis_data,
        log_level=(_get_env(source, "LOG_LEVEL") or LedgerConfig.log_level).upper(),
    )
    cfg.validate()
    return cfg


__all__ = ["ENV_PREFIX", "LedgerConfig", "load_config"]
