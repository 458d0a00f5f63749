"""
Metadata Diffing for Doc-Drift

Compares a fixed set of metadata fields between two documents. Unlike the
text comparisons, equality here is strict: list fields are compared by their
serialized form, so reordering dependencies or tags counts as a change.

Significance is a static lookup by field, not derived from similarity.
"""

import json
from datetime import datetime
from enum import Enum
from typing import Any, Mapping, Optional, Sequence, Union

from docdrift.models import ChangeType, DocumentMetadata, DriftChange, Significance


DEFAULT_METADATA_FIELDS: tuple[str, ...] = (
    "serviceName",
    "version",
    "dependencies",
    "tags",
    "category",
    "businessUnit",
)

HIGH_IMPACT_FIELDS = frozenset({"serviceName", "version"})
MEDIUM_IMPACT_FIELDS = frozenset({"dependencies", "category", "businessUnit"})

MetadataLike = Union[DocumentMetadata, Mapping[str, Any], None]


def _as_mapping(metadata: MetadataLike) -> Mapping[str, Any]:
    if metadata is None:
        return {}
    if isinstance(metadata, DocumentMetadata):
        return metadata.as_mapping()
    return metadata


def _stable_json(value: Any) -> str:
    # Enums and datetimes fall back to their string form
    return json.dumps(value, sort_keys=True, default=_json_default)


def _json_default(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, datetime):
        return value.isoformat()
    return str(value)


def format_metadata_value(value: Any) -> str:
    """
    Render a metadata value for display in a DriftChange.

    Lists are joined with ", ", dicts are JSON-dumped, booleans become
    "true"/"false", None becomes "" and everything else is str()-ed.
    """
    if value is None:
        return ""
    if isinstance(value, (list, tuple)):
        return ", ".join(str(item) for item in value)
    if isinstance(value, dict):
        return json.dumps(value, default=_json_default)
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, datetime):
        return value.isoformat()
    return str(value)


def metadata_significance(field_name: str) -> Significance:
    """Look up the static significance of a change to a metadata field."""
    if field_name in HIGH_IMPACT_FIELDS:
        return Significance.HIGH
    if field_name in MEDIUM_IMPACT_FIELDS:
        return Significance.MEDIUM
    return Significance.LOW


def diff_metadata(
    existing: MetadataLike,
    incoming: MetadataLike,
    fields: Optional[Sequence[str]] = None,
) -> list[DriftChange]:
    """
    Compare metadata field by field.

    Args:
        existing: Metadata of the stored document (model or camelCase mapping)
        incoming: Metadata of the newly enriched document
        fields: Fields to compare, in order; defaults to DEFAULT_METADATA_FIELDS

    Returns:
        One modification per differing field, in field order
    """
    old_map = _as_mapping(existing)
    new_map = _as_mapping(incoming)
    changes: list[DriftChange] = []

    for field_name in fields if fields is not None else DEFAULT_METADATA_FIELDS:
        old_value = old_map.get(field_name)
        new_value = new_map.get(field_name)

        if _stable_json(old_value) == _stable_json(new_value):
            continue

        changes.append(
            DriftChange(
                section=f"metadata.{field_name}",
                type=ChangeType.MODIFICATION,
                old_value=format_metadata_value(old_value),
                new_value=format_metadata_value(new_value),
                significance=metadata_significance(field_name),
            )
        )

    return changes
