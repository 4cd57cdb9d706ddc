"""Unified configuration loader for prosescope.

Configuration is resolved in priority order: **project > user > defaults**.

1. **Project-level** — ``.prosescope.yml`` in (or above) the target directory.
2. **User-level** — ``~/.prosescope/config.yml``.
3. **Built-in defaults** — the default scope table.

Both files share the same format::

    # .prosescope.yml  or  ~/.prosescope/config.yml
    segments:
      skip_tags:            # replaces the defaults (script, style, pre, figure)
        - script
        - style
      ignored_classes:      # added to the defaults (problematic, pre, code)
        - internal-note
      ignored_scopes:       # replaces the defaults (tt, code)
        - tt
      mask_char: "*"

    files:
      exclude:
        - "vendor/**"
      max_file_size_kb: 512

Project-level values override user-level values.  CLI flags override both.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import yaml

from prosescope.log import get_logger
from prosescope.masking import SKIP_CHAR
from prosescope.scopes import DEFAULT_SCOPE_TABLE, ScopeTable

logger = get_logger(__name__)

CONFIG_FILENAME = ".prosescope.yml"
USER_CONFIG_DIR = Path.home() / ".prosescope"
USER_CONFIG_PATH = USER_CONFIG_DIR / "config.yml"

_SECTIONS = ("segments", "files")


# ---------------------------------------------------------------------------
# Data classes
# ---------------------------------------------------------------------------


@dataclass
class SegmentConfig:
    """Segment-builder sub-configuration."""

    skip_tags: list[str] = field(default_factory=list)
    ignored_classes: list[str] = field(default_factory=list)
    ignored_scopes: list[str] = field(default_factory=list)
    mask_char: str = SKIP_CHAR

    def scope_table(self, base: ScopeTable = DEFAULT_SCOPE_TABLE) -> ScopeTable:
        """Return *base* with this configuration's overrides applied."""
        return base.with_overrides(
            skip_tags=self.skip_tags,
            ignored_classes=self.ignored_classes,
            ignored_scopes=self.ignored_scopes,
        )


@dataclass
class FilesConfig:
    """File discovery sub-configuration (CLI only)."""

    exclude: list[str] = field(default_factory=list)
    max_file_size_kb: int = 512


@dataclass
class ProseScopeConfig:
    """Top-level configuration container."""

    segments: SegmentConfig = field(default_factory=SegmentConfig)
    files: FilesConfig = field(default_factory=FilesConfig)

    # Where the effective config was loaded from (None = defaults only).
    project_config_path: str | None = None
    user_config_path: str | None = None


# ---------------------------------------------------------------------------
# Public loader
# ---------------------------------------------------------------------------


def load_config(
    target_path: str | None = None,
    config_path: str | Path | None = None,
) -> ProseScopeConfig:
    """Load merged configuration (project > user > defaults).

    Parameters
    ----------
    target_path:
        File or directory to search for ``.prosescope.yml``.  When *None*,
        only the user-level file (and defaults) are considered.
    config_path:
        Explicit config file path.  When given, *only* this file is
        loaded (no project/user search).
    """
    if config_path is not None:
        raw = _load_yaml(Path(config_path))
        cfg = _raw_to_config(raw)
        cfg.project_config_path = str(config_path) if raw is not None else None
        return cfg

    user_raw = _load_yaml(USER_CONFIG_PATH)
    user_source = str(USER_CONFIG_PATH) if user_raw else None

    project_raw: dict | None = None
    project_source: str | None = None
    if target_path is not None:
        project_path = _find_project_config(target_path)
        if project_path is not None:
            project_raw = _load_yaml(project_path)
            project_source = str(project_path)

    cfg = _raw_to_config(_merge_raw(project_raw, user_raw))
    cfg.project_config_path = project_source
    cfg.user_config_path = user_source
    return cfg


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _find_project_config(target_path: str) -> Path | None:
    """Search for ``.prosescope.yml`` next to *target_path* and in its ancestors."""
    p = Path(target_path)
    if p.is_file():
        p = p.parent
    candidates = [p / CONFIG_FILENAME]
    for parent in p.parents:
        candidates.append(parent / CONFIG_FILENAME)
        if (parent / ".git").exists():
            break
    for candidate in candidates:
        if candidate.is_file():
            return candidate
    return None


def _load_yaml(path: Path) -> dict | None:
    """Load a YAML file, returning *None* on missing/invalid files."""
    path = path.expanduser()
    if not path.is_file():
        return None
    try:
        raw = yaml.safe_load(path.read_text())
    except (OSError, yaml.YAMLError) as exc:
        logger.warning("ignoring unreadable config %s: %s", path, exc)
        return None
    if raw is not None and not isinstance(raw, dict):
        logger.warning("ignoring config %s: top level is not a mapping", path)
        return None
    return raw


def _merge_raw(project: dict | None, user: dict | None) -> dict:
    """Merge project and user raw dicts section by section (project wins)."""
    base: dict = {}
    for source in (user, project):
        if not source:
            continue
        for key in _SECTIONS:
            section = source.get(key)
            if isinstance(section, dict):
                base.setdefault(key, {}).update(section)
    return base


def _raw_to_config(raw: dict | None) -> ProseScopeConfig:
    """Convert a raw YAML dict to a ``ProseScopeConfig``."""
    if not raw:
        return ProseScopeConfig()

    seg_raw = raw.get("segments", {})
    if not isinstance(seg_raw, dict):
        seg_raw = {}

    files_raw = raw.get("files", {})
    if not isinstance(files_raw, dict):
        files_raw = {}

    mask_char = str(seg_raw.get("mask_char", SKIP_CHAR)) or SKIP_CHAR
    if len(mask_char) != 1:
        logger.warning("mask_char must be a single character, got %r", mask_char)
        mask_char = SKIP_CHAR

    try:
        max_kb = int(files_raw.get("max_file_size_kb", 512))
    except (TypeError, ValueError):
        max_kb = 512

    return ProseScopeConfig(
        segments=SegmentConfig(
            skip_tags=_as_list(seg_raw.get("skip_tags", [])),
            ignored_classes=_as_list(seg_raw.get("ignored_classes", [])),
            ignored_scopes=_as_list(seg_raw.get("ignored_scopes", [])),
            mask_char=mask_char,
        ),
        files=FilesConfig(
            exclude=_as_list(files_raw.get("exclude", [])),
            max_file_size_kb=max_kb,
        ),
    )


def _as_list(val: object) -> list[str]:
    """Coerce a value to a list of non-empty, de-duplicated strings."""
    if isinstance(val, str):
        val = [val]
    if not isinstance(val, list):
        return []
    out: list[str] = []
    for v in val:
        entry = str(v).strip()
        if entry and entry not in out:
            out.append(entry)
    return out
