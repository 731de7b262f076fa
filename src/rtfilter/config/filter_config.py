"""Load and save filter designs as YAML."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Mapping, MutableMapping

import yaml

from ..core.models import REFERENCE_SPEC, FilterSpec

# Alternative key names accepted when reading a mapping.
_ALIASES = {
    "feedback": "a",
    "feedback_coeffs": "a",
    "feedforward": "b",
    "feedforward_coeffs": "b",
    "sample_rate": "sample_rate_hz",
    "fs": "sample_rate_hz",
    "group_delay": "group_delay_samples",
    "avg_delay": "group_delay_samples",
    "cutoff": "cutoff_hz",
    "fc": "cutoff_hz",
}

_DESIGN_FIELDS = ("order", "sample_rate_hz", "a", "b")
_FIELDS = _DESIGN_FIELDS + ("group_delay_samples", "cutoff_hz")


def _normalize_mapping(data: Mapping[str, Any]) -> MutableMapping[str, Any]:
    """Flatten an optional top-level ``filter`` block and resolve aliases."""
    block = data.get("filter")
    source: Mapping[str, Any] = block if isinstance(block, Mapping) else data
    normalized: MutableMapping[str, Any] = {}
    for key, value in source.items():
        name = _ALIASES.get(str(key), str(key))
        if name in _FIELDS:
            normalized[name] = value
    return normalized


def spec_from_mapping(data: Mapping[str, Any] | None) -> FilterSpec:
    """
    Build a :class:`FilterSpec` from ``data`` (ignoring unknown keys).

    Supported shape::

        filter:
          order: 2
          sample_rate_hz: 100.0
          a: [1.0, -1.561018075800718, 0.641351538057563]
          b: [0.020083365564211, 0.040166731128423, 0.020083365564211]
          group_delay_samples: 5

    A mapping without any filter keys yields :data:`REFERENCE_SPEC`.
    Otherwise ``order``, ``sample_rate_hz``, ``a`` and ``b`` must all be
    given, since coefficients are only valid for the rate and order they
    were designed for. ``group_delay_samples`` and ``cutoff_hz`` default to
    0.0 and None.
    """
    if not data:
        return REFERENCE_SPEC
    payload = _normalize_mapping(data)
    if not payload:
        return REFERENCE_SPEC
    missing = [name for name in _DESIGN_FIELDS if name not in payload]
    if missing:
        raise ValueError(f"Incomplete filter design, missing: {', '.join(missing)}")
    return FilterSpec(**payload)


def spec_to_mapping(spec: FilterSpec) -> Dict[str, Any]:
    """Serialize ``spec`` into a mapping suitable for YAML."""
    block: Dict[str, Any] = {
        "order": spec.order,
        "sample_rate_hz": spec.sample_rate_hz,
        "a": list(spec.a),
        "b": list(spec.b),
        "group_delay_samples": spec.group_delay_samples,
        "cutoff_hz": spec.cutoff_hz,
    }
    return {"filter": block}


def load_filter_spec(path: str | Path | None) -> FilterSpec:
    """
    Load a filter design from ``path``.

    Missing files fall back to :data:`REFERENCE_SPEC`.
    """
    if path is None:
        return REFERENCE_SPEC
    cfg_path = Path(path)
    if not cfg_path.exists():
        return REFERENCE_SPEC
    with cfg_path.open("r", encoding="utf-8") as fh:
        raw = yaml.safe_load(fh) or {}
    if not isinstance(raw, Mapping):
        raise ValueError(f"Expected mapping in {cfg_path}, got {type(raw).__name__}")
    return spec_from_mapping(raw)


def save_filter_spec(path: str | Path, spec: FilterSpec) -> None:
    """Write ``spec`` to ``path`` as YAML, creating parent folders."""
    path = Path(path)
    if path.parent and not path.parent.exists():
        path.parent.mkdir(parents=True, exist_ok=True)

    with path.open("w", encoding="utf-8") as fh:
        yaml.safe_dump(
            spec_to_mapping(spec),
            fh,
            default_flow_style=False,
            sort_keys=False,
        )


__all__ = ["spec_from_mapping", "spec_to_mapping", "load_filter_spec", "save_filter_spec"]
