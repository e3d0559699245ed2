"""
Compositor configuration management (YAML files + environment overrides).
"""
from __future__ import annotations

import json
import logging
import os
import re
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Tuple, Union

import yaml

from compositor.core.exceptions import ConfigurationError
from compositor.core.schemas import validate_payload
from compositor.core.utils.io import read_yaml
from compositor.core.utils.merge import deep_merge
from compositor.core.utils.profiling import span
from compositor.data import get_data_path

logger = logging.getLogger(__name__)

ENV_PREFIX = "COMPOSITOR_"
SCHEMA_NAME = "compositor"


class ConfigManager:
    """Load, merge, and validate compositor configuration.

    Configuration sources (highest to lowest priority):
    1. Environment variables: COMPOSITOR_<section>__<key>
    2. Config files passed in ``config_paths`` (later files win)
    3. Bundled defaults: compositor.data/config/compositor.yaml

    Environment keys use ``__`` to separate nesting levels and are matched
    case-insensitively against existing keys, e.g.
    ``COMPOSITOR_compositor__basename=MyApp::Class``. A final ``APPEND``
    segment appends to a list:
    ``COMPOSITOR_compositor__post_transforms__APPEND=strict_constructor``.
    """

    APPEND = object()

    def __init__(
        self,
        config_paths: Optional[Iterable[Union[str, Path]]] = None,
        *,
        environ: Optional[Mapping[str, str]] = None,
    ) -> None:
        self.core_config_path = get_data_path("config", "compositor.yaml")
        self.config_paths: List[Path] = [Path(p) for p in (config_paths or [])]
        self._environ = environ

    @property
    def environ(self) -> Mapping[str, str]:
        return os.environ if self._environ is None else self._environ

    def load_yaml(self, path: Path) -> Dict[str, Any]:
        # Fail closed: configuration must never silently ignore invalid YAML.
        try:
            data = read_yaml(path, default={}, raise_on_error=True)
        except FileNotFoundError as exc:
            raise ConfigurationError(f"Config file not found: {path}", context={"path": str(path)}) from exc
        except yaml.YAMLError as exc:
            raise ConfigurationError(f"Invalid YAML in {path}: {exc}", context={"path": str(path)}) from exc
        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Config file {path} must contain a mapping, got {type(data).__name__}",
                context={"path": str(path)},
            )
        return data

    # ---------- Environment overrides ----------

    def _as_bool(self, v: str) -> Optional[bool]:
        low = v.strip().lower()
        if low in {"true", "false"}:
            return low == "true"
        return None

    def _as_number(self, v: str) -> Optional[Union[int, float]]:
        s = v.strip()
        if re.fullmatch(r"[-+]?\d+", s):
            return int(s)
        if re.fullmatch(r"[-+]?(\d*\.\d+|\d+\.\d*)", s):
            return float(s)
        return None

    def _as_json(self, v: str) -> Optional[Any]:
        s = v.strip()
        if (s.startswith("{") and s.endswith("}")) or (s.startswith("[") and s.endswith("]")):
            try:
                return json.loads(s)
            except json.JSONDecodeError:
                return None
        return None

    def _coerce_type(self, value: str) -> Any:
        for caster in (self._as_bool, self._as_number, self._as_json):
            result = caster(value)
            if result is not None:
                return result
        return value.strip()

    def _parse_env_key(self, raw: str) -> List[Union[str, object]]:
        segs = raw.split("__")
        if any(seg == "" for seg in segs):
            raise ConfigurationError(f"Malformed {ENV_PREFIX}* key: empty segment in '{raw}'")
        path: List[Union[str, object]] = []
        for i, seg in enumerate(segs):
            if seg.upper() == "APPEND" and i == len(segs) - 1 and i > 0:
                path.append(self.APPEND)
            else:
                path.append(seg)
        return path

    def _iter_env_overrides(self) -> Iterator[Tuple[List[Union[str, object]], Any]]:
        env = self.environ
        for key in sorted(env.keys()):
            if not key.startswith(ENV_PREFIX):
                continue
            raw = key[len(ENV_PREFIX):]
            if not raw:
                raise ConfigurationError(f"Malformed {ENV_PREFIX}* key")
            yield self._parse_env_key(raw), self._coerce_type(env[key])

    def _set_nested(self, root: Dict[str, Any], path: List[Union[str, object]], value: Any) -> None:
        cur: Dict[str, Any] = root
        for i, part in enumerate(path):
            is_last = i == len(path) - 1
            nxt = None if is_last else path[i + 1]
            if part is self.APPEND:
                # Only reachable as the leaf; handled by the parent step below.
                break
            candidates = {k.lower(): k for k in cur.keys() if isinstance(k, str)}
            key = candidates.get(str(part).lower(), str(part))
            if nxt is self.APPEND:
                existing = cur.get(key)
                if existing is None:
                    existing = cur[key] = []
                if not isinstance(existing, list):
                    raise ConfigurationError(f"APPEND requires a list at '{key}'")
                existing.append(value)
                return
            if is_last:
                cur[key] = value
                return
            child = cur.get(key)
            if child is None:
                child = cur[key] = {}
            if not isinstance(child, dict):
                raise ConfigurationError(f"Environment override traverses non-mapping key '{key}'")
            cur = child

    def apply_env_overrides(self, cfg: Dict[str, Any]) -> Dict[str, Any]:
        for path, value in self._iter_env_overrides():
            self._set_nested(cfg, path, value)
        return cfg

    # ---------- Loading ----------

    def load_config(self, validate: bool = True) -> Dict[str, Any]:
        """Return the merged configuration.

        Raises:
            ConfigurationError: For unreadable files, malformed overrides, or
                (when ``validate``) schema violations
        """
        with span("config.load"):
            cfg: Dict[str, Any] = self.load_yaml(self.core_config_path)
            for path in self.config_paths:
                logger.debug("Merging config file %s", path)
                cfg = deep_merge(cfg, self.load_yaml(path))
            cfg = self.apply_env_overrides(cfg)
            if validate:
                validate_payload(cfg, SCHEMA_NAME)
        return cfg

    def compositor_section(self, validate: bool = True) -> Dict[str, Any]:
        return dict(self.load_config(validate=validate).get("compositor") or {})


__all__ = ["ConfigManager", "ENV_PREFIX"]
