"""Settings for the CLI and batch conversion.

A YAML file is parsed into ``LinkSettings`` at startup; invalid settings fail
fast with pydantic's error messages.  Environment variables override the
file:

    AGENTLINK_LOG_LEVEL=DEBUG
    AGENTLINK_REFERRAL_CNFANS=abc123
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Mapping

import yaml
from pydantic import BaseModel, field_validator

from agentlink.models import Agent

logger = logging.getLogger(__name__)

ENV_PREFIX = "AGENTLINK_"
REFERRAL_PREFIX = f"{ENV_PREFIX}REFERRAL_"


class LinkSettings(BaseModel):
    log_level: str = "INFO"
    referrals: dict[Agent, str] = {}
    tracking_tag: str | None = None

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, v: str) -> str:
        level = v.upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"unknown log level {v!r}")
        return level


def load_settings(
    path: str | Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> LinkSettings:
    """Read settings from *path* (optional) and apply environment overrides."""
    raw: dict = {}
    if path is not None:
        raw = yaml.safe_load(Path(path).read_text()) or {}
        if not isinstance(raw, dict):
            raise ValueError(f"Settings file {path} must contain a mapping")

    env = os.environ if environ is None else environ
    referrals = dict(raw.get("referrals") or {})
    for key, value in env.items():
        if not key.startswith(REFERRAL_PREFIX) or not value:
            continue
        name = key[len(REFERRAL_PREFIX):].lower()
        if name not in {a.value for a in Agent}:
            logger.warning("Ignoring %s: %r is not a known agent", key, name)
            continue
        referrals[name] = value
    raw["referrals"] = referrals

    if env.get(f"{ENV_PREFIX}LOG_LEVEL"):
        raw["log_level"] = env[f"{ENV_PREFIX}LOG_LEVEL"]

    return LinkSettings.model_validate(raw)
