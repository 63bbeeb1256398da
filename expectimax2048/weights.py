"""
Evaluator weights and their JSON file format.

    {
      "version": "baseline-v1",
      "createdAt": "2026-01-01T00:00:00+00:00",
      "params": {"f_empty": 2.7, ...},
      "meta": {"note": "..."}          # optional
    }
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from dataclasses import dataclass, field
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

logger = logging.getLogger(__name__)

__all__ = [
    "FEATURE_KEYS",
    "LEGACY_ALIASES",
    "Weights",
    "WeightsError",
    "default_weights",
    "load_weights",
    "save_weights",
]

FEATURE_KEYS = (
    "f_empty",
    "f_max",
    "f_smooth",
    "f_mono",
    "f_mergePotential",
    "f_cornerMax",
)

# key -> older spelling still accepted in weight files
LEGACY_ALIASES: Dict[str, str] = {
    "f_empty": "empty",
    "f_max": "max",
    "f_smooth": "smooth",
    "f_mono": "mono",
    "f_mergePotential": "mergePotential",
    "f_cornerMax": "cornerMax",
}


class WeightsError(ValueError):
    """Raised when a weights file cannot be read or has the wrong shape."""


@dataclass(frozen=True)
class Weights:
    version: str
    created_at: str
    params: Mapping[str, float]
    meta: Optional[Mapping[str, str]] = field(default=None)

    def __post_init__(self) -> None:
        object.__setattr__(self, "params", MappingProxyType(dict(self.params)))
        if self.meta is not None:
            object.__setattr__(self, "meta", MappingProxyType(dict(self.meta)))

    def weight(self, key: str) -> float:
        """Weight for ``key``, falling back to its legacy alias, then 0."""
        if key in self.params:
            return float(self.params[key])
        alias = LEGACY_ALIASES.get(key)
        if alias is not None and alias in self.params:
            return float(self.params[alias])
        return 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "version": self.version,
            "createdAt": self.created_at,
            "params": dict(self.params),
            "meta": dict(self.meta) if self.meta is not None else None,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Weights":
        if not isinstance(data, Mapping):
            raise WeightsError("weights must be a JSON object")
        params = data.get("params")
        if not isinstance(params, Mapping):
            raise WeightsError("weights need a 'params' object")
        clean: Dict[str, float] = {}
        for k, v in params.items():
            if isinstance(v, bool) or not isinstance(v, (int, float)):
                raise WeightsError(f"param {k!r} is not a number: {v!r}")
            clean[str(k)] = float(v)

        known = set(FEATURE_KEYS) | set(LEGACY_ALIASES.values())
        unknown = sorted(set(clean) - known)
        if unknown:
            logger.warning(f"Ignoring unknown weight keys: {', '.join(unknown)}")

        meta = data.get("meta")
        if meta is not None:
            if not isinstance(meta, Mapping):
                raise WeightsError("'meta' must be an object of strings")
            meta = {str(k): str(v) for k, v in meta.items()}

        return cls(
            version=str(data.get("version", "")),
            created_at=str(data.get("createdAt", "")),
            params=clean,
            meta=meta,
        )


def default_weights() -> Weights:
    """Hand‑tuned baseline."""
    return Weights(
        version="baseline-v1",
        created_at=datetime.now(timezone.utc).isoformat(),
        params={
            "f_empty": 2.7,
            "f_max": 1.0,
            "f_smooth": 0.1,
            "f_mono": 1.0,
            "f_mergePotential": 0.7,
            "f_cornerMax": 0.5,
        },
    )


def load_weights(path: str) -> Weights:
    try:
        with open(path, "r") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise WeightsError(f"cannot read weights from {path}: {e}") from e
    weights = Weights.from_dict(data)
    logger.info(f"Loaded weights {weights.version or '<unversioned>'} from {path}")
    return weights


def save_weights(weights: Weights, path: str) -> None:
    """Write ``weights`` as pretty JSON, replacing ``path`` atomically."""
    directory = os.path.dirname(os.path.abspath(path))
    os.makedirs(directory, exist_ok=True)
    fd, tmp_path = tempfile.mkstemp(dir=directory, suffix=".tmp")
    try:
        with os.fdopen(fd, "w") as f:
            json.dump(weights.to_dict(), f, indent=2, sort_keys=True)
            f.write("\n")
        os.replace(tmp_path, path)
    except BaseException:
        if os.path.exists(tmp_path):
            os.remove(tmp_path)
        raise
    logger.info(f"Saved weights {weights.version} to {path}")
