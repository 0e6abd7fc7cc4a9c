"""
Config loader for the latency probe.

Behaviour
~~~~~~~~~
* Reads a JSON file with ``sync_list``, ``async_list`` and ``headers``.
* Any problem (missing file, malformed JSON, wrong shape, invalid header) is
  raised as :class:`ConfigError` before a single request is sent.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Union

from pydantic import ValidationError

from latency_probe.model import ProbeConfig

logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """The config file is missing or does not describe a valid probe run."""


def _describe(exc: ValidationError) -> str:
    first = exc.errors()[0]
    loc = ".".join(str(p) for p in first["loc"]) or "<root>"
    more = f" (+{exc.error_count() - 1} more)" if exc.error_count() > 1 else ""
    return f"{loc}: {first['msg']}{more}"


def load_config(src: Union[str, Path]) -> ProbeConfig:
    """Load and validate a :class:`ProbeConfig` from *src*."""
    path = Path(src)
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise ConfigError(f"config file not found: {path}") from None
    except OSError as exc:
        raise ConfigError(f"cannot read config file {path}: {exc.strerror}") from exc

    try:
        cfg = ProbeConfig.model_validate_json(raw)
    except ValidationError as exc:
        if any(e["type"] == "json_invalid" for e in exc.errors()):
            raise ConfigError(f"config file is not valid JSON: {path}") from exc
        raise ConfigError(f"invalid config file {path}: {_describe(exc)}") from exc

    logger.debug(
        "loaded %s: %d sync, %d async, %d headers",
        path, len(cfg.sync_list), len(cfg.async_list), len(cfg.headers),
    )
    return cfg
