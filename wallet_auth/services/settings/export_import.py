from __future__ import annotations

import json
from typing import Any

from .schema import CURRENT_SCHEMA_VERSION, WalletAuthSettings
from .validator import ValidateResult, validate_submission


def export_settings(data: WalletAuthSettings) -> dict[str, Any]:
    """Export settings to a JSON-serializable dict (storage shape + schema_version)."""

    d = data.to_storage()
    d["schema_version"] = CURRENT_SCHEMA_VERSION
    return d


def import_settings(payload: str | bytes) -> ValidateResult:
    """Parse settings JSON and validate it like a form submission.

    Raises ValueError when the payload is not a JSON object.
    """

    try:
        if isinstance(payload, bytes):
            payload = payload.decode("utf-8", errors="replace")
        raw = json.loads(payload)
    except ValueError as e:
        raise ValueError(f"Invalid JSON: {e}") from e

    if not isinstance(raw, dict):
        raise ValueError("Invalid settings file: expected a JSON object")

    raw.pop("schema_version", None)
    return validate_submission(raw)
