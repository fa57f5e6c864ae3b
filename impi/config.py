"""
Run configuration.

Settings come from an optional YAML file (`.impi.yaml` in the working
directory, or the file given with --config) and from the command line.
Command line values win over file values.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, List, Optional

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .errors import SetupError
from .types import VerifyOptions

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_NAME = ".impi.yaml"

_yaml = YAML(typ="safe")

_BOOL_KEYS = ("skip_tests", "ignore_generated")
_STR_KEYS = ("scheme", "local", "ignore")
_KNOWN_KEYS = set(_BOOL_KEYS) | set(_STR_KEYS) | {"skip_paths", "workers"}


@dataclass
class ImpiCfg:
    scheme: str = ""
    local: str = ""
    ignore: str = ""
    skip_tests: bool = False
    skip_paths: List[str] = field(default_factory=list)
    ignore_generated: bool = False
    workers: Optional[int] = None

    @staticmethod
    def from_dict(d: Optional[Dict[str, Any]], *, source: str = DEFAULT_CONFIG_NAME) -> ImpiCfg:
        """Load configuration from YAML dictionary."""
        if not d:
            return ImpiCfg()

        unknown = sorted(set(d) - _KNOWN_KEYS)
        if unknown:
            raise SetupError(f"{source}: unknown key(s): {', '.join(unknown)}")

        cfg = ImpiCfg()

        for key in _STR_KEYS:
            if key in d:
                val = d[key]
                if not isinstance(val, str):
                    raise SetupError(f"{source}: {key}: expected string, got {type(val).__name__}")
                setattr(cfg, key, val)

        for key in _BOOL_KEYS:
            if key in d:
                val = d[key]
                if not isinstance(val, bool):
                    raise SetupError(f"{source}: {key}: expected bool, got {type(val).__name__}")
                setattr(cfg, key, val)

        if "skip_paths" in d:
            val = d["skip_paths"]
            if isinstance(val, str):
                val = [val]
            if not isinstance(val, list) or not all(isinstance(p, str) for p in val):
                raise SetupError(f"{source}: skip_paths: expected list of strings")
            cfg.skip_paths = list(val)

        if "workers" in d and d["workers"] is not None:
            val = d["workers"]
            if isinstance(val, bool) or not isinstance(val, int) or val < 1:
                raise SetupError(f"{source}: workers: expected positive integer, got {val!r}")
            cfg.workers = val

        return cfg

    def to_options(self) -> VerifyOptions:
        return VerifyOptions(
            scheme=self.scheme,
            local_prefix=self.local,
            skip_tests=self.skip_tests,
            skip_paths=tuple(self.skip_paths),
            ignore_generated=self.ignore_generated,
            ignore_pattern=self.ignore,
        )


def _read_yaml_map(path: Path) -> dict:
    """Read a YAML file and return it as a mapping."""
    try:
        raw = _yaml.load(path.read_text(encoding="utf-8")) or {}
    except YAMLError as e:
        raise SetupError(f"{path}: invalid YAML: {e}") from e
    if not isinstance(raw, dict):
        raise SetupError(f"YAML must be a mapping: {path}")
    return raw


def load_config(path: Optional[Path] = None, *, cwd: Optional[Path] = None) -> ImpiCfg:
    """
    Load the configuration file.

    An explicit path must exist; the default `.impi.yaml` is optional.
    """
    if path is None:
        path = (cwd or Path.cwd()) / DEFAULT_CONFIG_NAME
        if not path.is_file():
            return ImpiCfg()
    elif not path.is_file():
        raise SetupError(f"Config file not found: {path}")

    logger.debug("loading config from %s", path)
    return ImpiCfg.from_dict(_read_yaml_map(path), source=str(path))


def merge_cli(cfg: ImpiCfg, overrides: Dict[str, Any]) -> ImpiCfg:
    """Apply command line values on top of file values. None means 'not given'."""
    changes: Dict[str, Any] = {}
    for key, val in overrides.items():
        if val is None:
            continue
        if key == "skip_paths":
            if not val:
                continue
            val = list(val)
        if key in _BOOL_KEYS and val is False:
            # store_true flags can only switch a setting on
            continue
        changes[key] = val
    return replace(cfg, **changes)


__all__ = ["ImpiCfg", "DEFAULT_CONFIG_NAME", "load_config", "merge_cli"]
