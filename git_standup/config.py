"""Environment defaults for git-standup.

`load_dotenv()` runs before this module is consulted, so every variable can
also live in a `.env` file next to where the tool is invoked:

- GIT_STANDUP_WEEKDAYS            weekday range, e.g. "Sun-Thu"
- GIT_STANDUP_MAX_DEPTH           default for -m
- GIT_STANDUP_DATE_FORMAT         default for -D
- GIT_STANDUP_WHITELIST           name of the search-roots file
- GIT_STANDUP_VERBOSE / _DEBUG    trace git invocations
- GIT_STANDUP_GIT_TIMEOUT_SECONDS per-command git timeout (unset = none)
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from git_standup.options import DEFAULT_DATE_FORMAT, DEFAULT_MAX_DEPTH


DEFAULT_WHITELIST_FILENAME = ".git-standup-whitelist"


class ConfigError(ValueError):
    pass


def env_flag(name: str, environ: Optional[Mapping[str, str]] = None) -> bool:
    env = os.environ if environ is None else environ
    return (env.get(name) or "").strip().lower() in {"1", "true", "yes", "on"}


def _env_str(env: Mapping[str, str], name: str) -> Optional[str]:
    value = (env.get(name) or "").strip()
    return value or None


def _env_int(env: Mapping[str, str], name: str, default: int) -> int:
    value = _env_str(env, name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {value!r}")


def git_timeout_seconds(environ: Optional[Mapping[str, str]] = None) -> Optional[float]:
    env = os.environ if environ is None else environ
    value = (env.get("GIT_STANDUP_GIT_TIMEOUT_SECONDS") or "").strip()
    if not value:
        return None
    try:
        seconds = float(value)
        if seconds <= 0:
            return None
        return seconds
    except ValueError:
        return None


@dataclass(frozen=True)
class EnvDefaults:
    weekdays: Optional[str] = None
    max_depth: int = DEFAULT_MAX_DEPTH
    date_format: str = DEFAULT_DATE_FORMAT
    whitelist_filename: str = DEFAULT_WHITELIST_FILENAME
    verbose: bool = False


def load_env_defaults(environ: Optional[Mapping[str, str]] = None) -> EnvDefaults:
    env = os.environ if environ is None else environ
    return EnvDefaults(
        weekdays=_env_str(env, "GIT_STANDUP_WEEKDAYS"),
        max_depth=_env_int(env, "GIT_STANDUP_MAX_DEPTH", DEFAULT_MAX_DEPTH),
        date_format=_env_str(env, "GIT_STANDUP_DATE_FORMAT") or DEFAULT_DATE_FORMAT,
        whitelist_filename=_env_str(env, "GIT_STANDUP_WHITELIST") or DEFAULT_WHITELIST_FILENAME,
        verbose=env_flag("GIT_STANDUP_VERBOSE", env) or env_flag("GIT_STANDUP_DEBUG", env),
    )
