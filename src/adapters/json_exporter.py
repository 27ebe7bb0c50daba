"""JSON export of aggregated beacon answers.

Why JSON:
- Interoperability with other tools and pipelines.
- `null` keeps unknown answers distinct from `false`.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Iterable

from core.domain.models import BeaconResponse


def export_responses_json(*, responses: Iterable[BeaconResponse], output_path: Path) -> Path:
    """Write the outbound records as UTF-8 JSON with a stable layout."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    payload = [response.to_record() for response in responses]
    output_path.write_text(
        json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True) + "\n",
        encoding="utf-8",
    )
    return output_path
