"""Data preparation for export."""

import datetime
import json
from typing import Any, Dict, Optional

from ..core.constants import FileConstants
from ..core.models import QueryKind
from ..core.results import FetchResult


def prepare_export(query: str, kind: Optional[QueryKind], result: FetchResult) -> Dict[str, Any]:
    """Prepare a search outcome for JSON export."""
    return {
        "query": query,
        "kind": kind.value if kind else None,
        "status": result.status.value,
        "failure": result.failure.value if result.failure else None,
        "reason": result.reason,
        "insight": result.value.to_wire() if result.ok else None,
        "metadata": {
            "export_timestamp": None,  # Will be set by caller
            "version": FileConstants.EXPORT_VERSION,
        },
    }


def export_to_json(data: Dict[str, Any], filename: str) -> None:
    """Export data to JSON file."""
    data.setdefault("metadata", {})["export_timestamp"] = datetime.datetime.now().isoformat()

    with open(filename, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)
