"""Configuration loader for crosspost.

Loads a YAML config file with environment variable overrides. Settings
use the CROSSPOST_ prefix; destination credentials use the variable names
listed in the destination registry (e.g. DEVTO_API_KEY).
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from crosspost.credentials import MappingCredentialSource
from crosspost.registry import REGISTRY

ENV_PREFIX = "CROSSPOST_"


@dataclass
class PublisherConfig:
    """Unified configuration for the publisher and its adapters."""
    credentials: dict[str, str] = field(default_factory=dict)
    live_mode: bool = False
    timeout: float | None = None
    http_timeout: float = 30.0
    medium_publish_status: str = "public"

    def credential_source(self) -> MappingCredentialSource:
        return MappingCredentialSource(self.credentials)


def credential_names() -> list[str]:
    return [name for d in REGISTRY.values() for name in d.env_vars]


def load_config(
    path: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> PublisherConfig:
    """Load config from YAML file with env var overrides.

    Env vars override YAML values. Mapping:
      CROSSPOST_LIVE_MODE → live_mode
      CROSSPOST_TIMEOUT → timeout
      CROSSPOST_HTTP_TIMEOUT → http_timeout
      CROSSPOST_MEDIUM_PUBLISH_STATUS → medium.publish_status
      <credential name> → credentials.<credential name>
    """
    env = os.environ if environ is None else environ
    raw: dict[str, Any] = {}
    if path and path.exists():
        loaded = yaml.safe_load(path.read_text(encoding="utf-8"))
        raw = loaded if isinstance(loaded, dict) else {}

    yaml_creds = raw.get("credentials") if isinstance(raw.get("credentials"), dict) else {}
    medium = raw.get("medium") if isinstance(raw.get("medium"), dict) else {}

    credentials: dict[str, str] = {}
    for name in credential_names():
        value = env.get(name, yaml_creds.get(name, ""))
        if value:
            credentials[name] = str(value)

    return PublisherConfig(
        credentials=credentials,
        live_mode=_env_bool(env, "LIVE_MODE", bool(raw.get("live_mode", False))),
        timeout=_env_float(env, "TIMEOUT", raw.get("timeout")),
        http_timeout=_env_float(env, "HTTP_TIMEOUT", raw.get("http_timeout", 30.0)) or 30.0,
        medium_publish_status=env.get(
            f"{ENV_PREFIX}MEDIUM_PUBLISH_STATUS",
            medium.get("publish_status", "public"),
        ),
    )


def _env_bool(env: Mapping[str, str], suffix: str, default: bool) -> bool:
    val = env.get(f"{ENV_PREFIX}{suffix}")
    if val is None:
        return default
    return val.lower() in ("true", "1", "yes")


def _env_float(env: Mapping[str, str], suffix: str, default: Any) -> float | None:
    val = env.get(f"{ENV_PREFIX}{suffix}", default)
    if val is None or val == "":
        return None
    try:
        return float(val)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{ENV_PREFIX}{suffix} must be a number, got {val!r}") from exc
