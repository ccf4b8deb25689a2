"""Rules for which paths may be remembered and later resumed as redirects."""

from dataclasses import dataclass, field
from typing import Iterable, Optional, Tuple

import logging
import os

import toml

log = logging.getLogger(__name__)

DEFAULT_GATE_PATHS = ("/auth", "/start", "/onboarding", "/welcome", "/choose-account-type")
DEFAULT_LEGACY_PATHS = ("/login", "/signup", "/join", "/logout", "/api/login", "/api/callback", "/api/logout")


def _clean(path: str) -> str:
    path = path.strip()
    if len(path) > 1:
        path = path.rstrip("/")
    return path.lower()


def _merge(defaults: Tuple[str, ...], extra: Iterable[str]) -> Tuple[str, ...]:
    merged = list(defaults)
    for item in extra:
        if isinstance(item, str) and item.startswith("/") and item not in merged:
            merged.append(item)
    return tuple(merged)


@dataclass(frozen=True)
class GateConfig:
    """Deny-list data for redirect memory. Extend through a TOML file, not code."""

    gate_paths: Tuple[str, ...] = DEFAULT_GATE_PATHS
    legacy_paths: Tuple[str, ...] = DEFAULT_LEGACY_PATHS
    denied: Tuple[str, ...] = field(init=False, repr=False)

    def __post_init__(self):
        object.__setattr__(self, "denied", tuple(_clean(p) for p in self.gate_paths + self.legacy_paths))


DEFAULT_CONFIG = GateConfig()


def load_gate_config(path: Optional[str]) -> GateConfig:
    """
    Read ``[gate] extra_gate_paths`` / ``extra_legacy_paths`` from a TOML file.
    A missing or unreadable file yields the defaults.
    """
    if not path or not os.path.exists(path):
        return DEFAULT_CONFIG
    try:
        data = toml.load(path)
    except (toml.TomlDecodeError, OSError) as e:
        log.error(f"Gate config {path} unreadable, using defaults: {e}")
        return DEFAULT_CONFIG

    section = data.get("gate", {})
    config = GateConfig(
        gate_paths=_merge(DEFAULT_GATE_PATHS, section.get("extra_gate_paths", [])),
        legacy_paths=_merge(DEFAULT_LEGACY_PATHS, section.get("extra_legacy_paths", [])),
    )
    log.info(f"Gate config loaded from {path}: {len(config.denied)} denied paths")
    return config


def strip_query(path: str) -> str:
    for sep in ("?", "#"):
        path = path.split(sep, 1)[0]
    return path


def is_safe_return_path(path: Optional[str]) -> bool:
    """Only same-origin relative paths; rejects //host, backslash and @ tricks."""
    if not isinstance(path, str) or not path:
        return False
    if not path.startswith("/") or path.startswith("//"):
        return False
    if "\\" in path or "@" in path:
        return False
    return not any(ord(ch) < 32 or ord(ch) == 127 for ch in path)


def is_gate_path(path: str, config: GateConfig = DEFAULT_CONFIG) -> bool:
    candidate = _clean(strip_query(path))
    return any(candidate == denied or candidate.startswith(denied + "/") for denied in config.denied)


def sanitize_redirect(value: Optional[str], config: GateConfig = DEFAULT_CONFIG) -> Optional[str]:
    """Return the value if it may be resumed later, otherwise None."""
    if not is_safe_return_path(value):
        return None
    if is_gate_path(value, config):
        return None
    return value
