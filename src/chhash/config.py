"""Typed configuration loader for chhash."""

from __future__ import annotations

import os
import tomllib
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .contracts.error import BadInputError
from .core.hashing import DEFAULT_HASH_BITS, SUPPORTED_HASH_BITS, StringKey, string_key
from .core.maps import ChainedHashMap

_TRUE_WORDS = {"1", "true", "yes", "on"}
_FALSE_WORDS = {"0", "false", "no", "off"}
_DISABLED_WORDS = {"none", "null", "disabled", "off"}


@dataclass
class MapPolicy:
    bucket_count: int = 64
    hash_bits: int = DEFAULT_HASH_BITS

    def validate(self) -> None:
        if isinstance(self.bucket_count, bool) or not isinstance(self.bucket_count, int):
            raise BadInputError("map.bucket_count must be an integer")
        if self.bucket_count <= 0:
            raise BadInputError("map.bucket_count must be > 0")
        if (
            isinstance(self.hash_bits, bool)
            or not isinstance(self.hash_bits, int)
            or self.hash_bits not in SUPPORTED_HASH_BITS
        ):
            raise BadInputError(f"map.hash_bits must be one of {SUPPORTED_HASH_BITS}")


@dataclass
class WatchdogPolicy:
    enabled: bool = True
    load_factor_warn: float | None = 4.0
    max_chain_warn: int | None = 16

    def validate(self) -> None:
        if self.load_factor_warn is not None and self.load_factor_warn <= 0.0:
            raise BadInputError("watchdog.load_factor_warn must be > 0 when set")
        if self.max_chain_warn is not None and self.max_chain_warn <= 0:
            raise BadInputError("watchdog.max_chain_warn must be > 0 when set")


def _strict_int(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, str)):
        raise TypeError(f"expected an integer, got {type(value).__name__}")
    return int(value)


def _strict_float(value: Any) -> float:
    if isinstance(value, bool):
        raise TypeError("expected a number, got bool")
    return float(value)


def _parse_bool(raw: Any, name: str) -> bool:
    if isinstance(raw, str):
        normalized = raw.strip().lower()
        if normalized in _TRUE_WORDS:
            return True
        if normalized in _FALSE_WORDS:
            return False
        raise BadInputError(f"{name} must be boolean")
    return bool(raw)


@dataclass
class AppConfig:
    map: MapPolicy = field(default_factory=MapPolicy)
    watchdog: WatchdogPolicy = field(default_factory=WatchdogPolicy)

    @classmethod
    def load(cls, path: Path | None) -> AppConfig:
        if path is None:
            cfg = cls()
        else:
            try:
                data = tomllib.loads(path.read_text(encoding="utf-8"))
            except FileNotFoundError as exc:
                raise BadInputError(f"Config file not found: {path}") from exc
            except tomllib.TOMLDecodeError as exc:
                raise BadInputError(f"Invalid TOML: {exc}") from exc
            cfg = cls.from_dict(data)
        cfg.apply_env_overrides(os.environ)
        cfg.validate()
        return cfg

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AppConfig:
        map_data = data.get("map", {})
        if not isinstance(map_data, dict):
            raise BadInputError("[map] section must be a table")
        try:
            map_policy = MapPolicy(**map_data)
        except TypeError as exc:
            raise BadInputError(f"Unknown key in [map]: {exc}") from exc

        watchdog_data = data.get("watchdog", {})
        if not isinstance(watchdog_data, dict):
            raise BadInputError("[watchdog] section must be a table")
        watchdog_kwargs: dict[str, Any] = {}
        if "enabled" in watchdog_data:
            watchdog_kwargs["enabled"] = _parse_bool(watchdog_data["enabled"], "watchdog.enabled")

        def coerce_optional(key: str, caster: Callable[[Any], Any]) -> None:
            if key not in watchdog_data:
                return
            value = watchdog_data[key]
            if isinstance(value, str) and value.strip().lower() in _DISABLED_WORDS:
                watchdog_kwargs[key] = None
                return
            if value is None:
                watchdog_kwargs[key] = None
                return
            try:
                watchdog_kwargs[key] = caster(value)
            except (TypeError, ValueError) as exc:
                raise BadInputError(f"watchdog.{key} must be a number or 'none'") from exc

        coerce_optional("load_factor_warn", _strict_float)
        coerce_optional("max_chain_warn", _strict_int)

        return cls(map=map_policy, watchdog=WatchdogPolicy(**watchdog_kwargs))

    def apply_env_overrides(self, env: Mapping[str, str]) -> None:
        map_mapping: dict[str, tuple[str, Callable[[str], Any]]] = {
            "CHHASH_BUCKET_COUNT": ("bucket_count", int),
            "CHHASH_HASH_BITS": ("hash_bits", int),
        }
        for key, (attr, caster) in map_mapping.items():
            raw_value = env.get(key)
            if raw_value is None:
                continue
            try:
                value = caster(raw_value)
            except ValueError as exc:
                raise BadInputError(f"Invalid env override {key}={raw_value!r}") from exc
            setattr(self.map, attr, value)

        raw_enabled = env.get("CHHASH_WATCHDOG_ENABLED")
        if raw_enabled is not None:
            try:
                self.watchdog.enabled = _parse_bool(raw_enabled, "CHHASH_WATCHDOG_ENABLED")
            except BadInputError as exc:
                raise BadInputError(
                    f"Invalid env override CHHASH_WATCHDOG_ENABLED={raw_enabled!r}"
                ) from exc

        threshold_overrides: dict[str, tuple[str, Callable[[str], Any]]] = {
            "CHHASH_LOAD_FACTOR_WARN": ("load_factor_warn", float),
            "CHHASH_MAX_CHAIN_WARN": ("max_chain_warn", int),
        }
        for key, (attr, caster) in threshold_overrides.items():
            raw_value = env.get(key)
            if raw_value is None:
                continue
            if raw_value.strip().lower() in _DISABLED_WORDS:
                setattr(self.watchdog, attr, None)
                continue
            try:
                value = caster(raw_value)
            except ValueError as exc:
                raise BadInputError(f"Invalid env override {key}={raw_value!r}") from exc
            setattr(self.watchdog, attr, value)

    def validate(self) -> None:
        self.map.validate()
        self.watchdog.validate()

    def build_map(self) -> ChainedHashMap[Any, Any]:
        return ChainedHashMap(self.map.bucket_count)

    def make_key(self, text: str) -> StringKey:
        return string_key(text, bits=self.map.hash_bits)


def load_app_config(path: str | None) -> AppConfig:
    config_path = Path(path) if path else None
    return AppConfig.load(config_path)


__all__ = [
    "AppConfig",
    "MapPolicy",
    "WatchdogPolicy",
    "load_app_config",
]
