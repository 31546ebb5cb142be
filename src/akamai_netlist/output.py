"""Rendering of API results for the terminal."""

import json
from typing import Any

import yaml
from pydantic import BaseModel

from akamai_netlist.sync import SyncResult

OUTPUT_FORMATS = ("json", "yaml")


def to_plain(data: Any) -> Any:
    """Convert models (or containers of models) to plain data.

    Args:
        data: Model, list, dict or scalar.

    Returns:
        JSON-compatible data using the API's field names.
    """
    if isinstance(data, BaseModel):
        return data.model_dump(by_alias=True, exclude_none=True, mode="json")
    if isinstance(data, (list, tuple)):
        return [to_plain(item) for item in data]
    if isinstance(data, dict):
        return {key: to_plain(value) for key, value in data.items()}
    return data


def render(data: Any, fmt: str = "json") -> str:
    """Serialize data for output.

    Args:
        data: Data to render.
        fmt: ``json`` or ``yaml``.

    Returns:
        Rendered text.

    Raises:
        ValueError: If the format is unknown.
    """
    plain = to_plain(data)
    if fmt == "json":
        return json.dumps(plain, indent=2)
    if fmt == "yaml":
        return yaml.safe_dump(plain, default_flow_style=False, sort_keys=False).rstrip("\n")
    msg = f"Unknown output format: {fmt}"
    raise ValueError(msg)


def format_sync_result(result: SyncResult) -> str:
    """Build the human-readable report of a sync.

    Args:
        result: Outcome of the sync.

    Returns:
        Multi-line report.
    """
    lines = [
        f"Source: {result.source}",
        f"Destination: {result.destination_id}",
    ]

    if result.unchanged:
        lines.append("✓ No changes needed")
        return "\n".join(lines)

    if result.to_add:
        lines.append(f"\n📥 To Add ({len(result.to_add)}):")
        lines.extend(f"  + {element}" for element in result.to_add)

    if result.to_remove:
        lines.append(f"\n📤 To Remove ({len(result.to_remove)}):")
        lines.extend(f"  - {element}" for element in result.to_remove)

    lines.append(
        f"\n✓ Added {result.added}, removed {result.removed} "
        f"in {result.duration_seconds:.1f}s"
    )
    if result.removal_skipped:
        lines.append(
            f"⚠ {len(result.to_remove)} elements were not removed; "
            "re-run with --force to remove them"
        )
    return "\n".join(lines)
