"""pipeline.config

Static configuration for a size comparison run.

Values are resolved with this precedence (most explicit wins):

  1) explicit overrides (CLI flags)
  2) ``SIZEBOT_*`` environment variables
  3) an optional JSON config file
  4) the defaults below
"""

from __future__ import annotations

import json
import math
import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple

from sizebot.domain import ThresholdConfig
from sizebot.errors import ConfigError
from sizebot.io.layout import DEFAULT_COMMIT_MARKER, BuildPaths

from .measure import DEFAULT_WORKERS
from .overflow import DEFAULT_FALLBACK_FILENAME, GITHUB_COMMENT_MAX_CHARS


# Production bundles reported on every run, changed or not.
DEFAULT_ALWAYS_CRITICAL_PATHS: Tuple[str, ...] = (
    "oss-stable/react-dom/cjs/react-dom.production.js",
    "oss-stable/react-dom/cjs/react-dom-client.production.js",
    "oss-experimental/react-dom/cjs/react-dom.production.js",
    "oss-experimental/react-dom/cjs/react-dom-client.production.js",
    "facebook-www/ReactDOM-prod.classic.js",
    "facebook-www/ReactDOM-prod.modern.js",
)

DEFAULT_DIFF_VIEW_URL_TEMPLATE = (
    "https://react-builds.vercel.app/commits/{head_sha}/files/{path}?compare={base_sha}"
)

ENV_PREFIX = "SIZEBOT_"


@dataclass(frozen=True)
class SizeBotConfig:
    base_dir: Path = Path("base-build")
    head_dir: Path = Path("build")
    extension: str = ".js"
    commit_marker: str = DEFAULT_COMMIT_MARKER

    critical_threshold: float = 0.02
    significance_threshold: float = 0.002
    always_critical_paths: Tuple[str, ...] = DEFAULT_ALWAYS_CRITICAL_PATHS

    max_message_chars: int = GITHUB_COMMENT_MAX_CHARS
    fallback_filename: str = DEFAULT_FALLBACK_FILENAME
    job_url_env: str = "CIRCLE_BUILD_URL"
    diff_view_url_template: str = DEFAULT_DIFF_VIEW_URL_TEMPLATE

    workers: int = DEFAULT_WORKERS
    skip_if_only_changed: Tuple[str, ...] = ("packages/react-devtools",)

    @property
    def thresholds(self) -> ThresholdConfig:
        return ThresholdConfig(
            critical_threshold=self.critical_threshold,
            significance_threshold=self.significance_threshold,
            always_critical_paths=self.always_critical_paths,
        )

    @property
    def build_paths(self) -> BuildPaths:
        return BuildPaths(
            base_dir=Path(self.base_dir),
            head_dir=Path(self.head_dir),
            commit_marker=self.commit_marker,
        )

    def job_url(self, env: Optional[Mapping[str, str]] = None) -> Optional[str]:
        source = os.environ if env is None else env
        val = str(source.get(self.job_url_env) or "").strip()
        return val or None


# ---------------------------------------------------------------------------
# Coercion
# ---------------------------------------------------------------------------


_FIELD_NAMES = {f.name for f in fields(SizeBotConfig)}
_PATH_FIELDS = {"base_dir", "head_dir"}
_FLOAT_FIELDS = {"critical_threshold", "significance_threshold"}
_INT_FIELDS = {"max_message_chars", "workers"}
_LIST_FIELDS = {"always_critical_paths", "skip_if_only_changed"}


def _as_list(name: str, raw: Any) -> Tuple[str, ...]:
    if isinstance(raw, str):
        parts = raw.split(",")
    elif isinstance(raw, (list, tuple)):
        parts = [str(x) for x in raw]
    else:
        raise ConfigError(f"{name} must be a list or comma-separated string (got {raw!r})")
    return tuple(p.strip() for p in parts if p.strip())


def _coerce(name: str, raw: Any) -> Any:
    try:
        if name in _PATH_FIELDS:
            return Path(str(raw))
        if name in _FLOAT_FIELDS:
            return float(raw)
        if name in _INT_FIELDS:
            if isinstance(raw, bool):
                raise ValueError("boolean is not an integer")
            return int(str(raw).strip())
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid value for {name}: {raw!r}") from e
    if name in _LIST_FIELDS:
        return _as_list(name, raw)
    return str(raw)


def _coerce_all(values: Mapping[str, Any], *, source: str) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for key, raw in values.items():
        if key not in _FIELD_NAMES:
            raise ConfigError(f"Unknown config key {key!r} in {source}")
        if raw is None:
            continue
        out[key] = _coerce(key, raw)
    return out


# ---------------------------------------------------------------------------
# Sources
# ---------------------------------------------------------------------------


def read_config_file(path: Path) -> Dict[str, Any]:
    p = Path(path)
    try:
        data = json.loads(p.read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigError(f"Cannot read config file {p}: {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigError(f"Config file {p} is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {p} must contain a JSON object")
    return _coerce_all(data, source=str(p))


def read_env(env: Mapping[str, str]) -> Dict[str, Any]:
    values: Dict[str, Any] = {}
    for name in sorted(_FIELD_NAMES):
        key = ENV_PREFIX + name.upper()
        raw = env.get(key)
        if raw is not None and str(raw).strip() != "":
            values[name] = raw
    return _coerce_all(values, source="environment")


def validate(cfg: SizeBotConfig) -> SizeBotConfig:
    if not (math.isfinite(cfg.critical_threshold) and math.isfinite(cfg.significance_threshold)):
        raise ConfigError(
            "Thresholds must be finite numbers "
            f"(critical={cfg.critical_threshold}, significance={cfg.significance_threshold})"
        )
    if cfg.critical_threshold < 0 or cfg.significance_threshold < 0:
        raise ConfigError("Thresholds must be non-negative")
    if cfg.significance_threshold > cfg.critical_threshold:
        raise ConfigError(
            "significance_threshold must not exceed critical_threshold "
            f"({cfg.significance_threshold} > {cfg.critical_threshold})"
        )
    if cfg.workers < 1:
        raise ConfigError(f"workers must be >= 1 (got {cfg.workers})")
    if cfg.max_message_chars < 1:
        raise ConfigError(f"max_message_chars must be >= 1 (got {cfg.max_message_chars})")
    if not cfg.extension.strip():
        raise ConfigError("extension must not be empty")
    if len(set(cfg.always_critical_paths)) != len(cfg.always_critical_paths):
        raise ConfigError("always_critical_paths contains duplicates")
    if not cfg.fallback_filename.strip():
        raise ConfigError("fallback_filename must not be empty")
    try:
        cfg.diff_view_url_template.format(base_sha="", head_sha="", path="")
    except (KeyError, IndexError, ValueError) as e:
        raise ConfigError(
            "diff_view_url_template may only use {base_sha}, {head_sha} and {path} "
            f"(got {cfg.diff_view_url_template!r}: {e!r})"
        ) from e
    return cfg


def load_config(
    *,
    config_path: Optional[Path] = None,
    env: Optional[Mapping[str, str]] = None,
    overrides: Optional[Mapping[str, Any]] = None,
) -> SizeBotConfig:
    """Build and validate a :class:`SizeBotConfig` from all sources."""

    merged: Dict[str, Any] = {}
    if config_path is not None:
        merged.update(read_config_file(config_path))
    merged.update(read_env(os.environ if env is None else env))
    if overrides:
        merged.update(_coerce_all(overrides, source="overrides"))
    return validate(replace(SizeBotConfig(), **merged))
