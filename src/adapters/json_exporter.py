"""JSON export of search results.

- Interop with other tooling (facts, inventories).
- `options` are dumped as plain objects, options file paths as strings.
"""

from __future__ import annotations

import json
from collections.abc import Iterable
from pathlib import Path

from core.domain.record import Record


def records_to_json(records: Iterable[Record]) -> str:
    payload = [record.to_dict() for record in records]
    return json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True) + "\n"


def export_records_json(*, records: Iterable[Record], output_path: Path) -> Path:
    """Write `records` to `output_path` as UTF-8 JSON with a stable layout."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(records_to_json(records), encoding="utf-8")
    return output_path
