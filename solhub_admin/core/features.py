# solhub_admin/core/features.py
"""Resolution of a laboratory's feature flags against the global catalog."""
from typing import Any, Dict, Iterable, Mapping, Optional


def active_keys(catalog: Iterable[Mapping[str, Any]]):
    return [entry["key"] for entry in catalog if entry.get("is_active", True)]


def resolve_features(
    catalog: Iterable[Mapping[str, Any]], features: Optional[Mapping[str, Any]]
) -> Dict[str, bool]:
    """
    Produce a boolean for every active catalog key.

    Keys missing from the laboratory's map resolve to False. Keys stored on the
    laboratory but absent from (or inactive in) the catalog are not reported.
    """
    features = features or {}
    return {key: features.get(key) is True for key in active_keys(catalog)}


def count_enabled(catalog: Iterable[Mapping[str, Any]], features: Optional[Mapping[str, Any]]) -> int:
    return sum(1 for enabled in resolve_features(catalog, features).values() if enabled)


def toggle_feature(features: Optional[Mapping[str, Any]], key: str, enabled: bool) -> Dict[str, Any]:
    """Return a copy of ``features`` with one key replaced"""
    updated = dict(features or {})
    updated[key] = bool(enabled)
    return updated


def add_feature_key(features: Optional[Mapping[str, Any]], key: str) -> Dict[str, Any]:
    """New catalog keys start disabled; an existing value is left untouched"""
    updated = dict(features or {})
    updated.setdefault(key, False)
    return updated


def remove_feature_key(features: Optional[Mapping[str, Any]], key: str) -> Dict[str, Any]:
    return {k: v for k, v in (features or {}).items() if k != key}
