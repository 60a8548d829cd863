from __future__ import annotations

import json
from numbers import Real
from pathlib import Path
from typing import Any

from ..models.import_run import ImportRun
from ..models.schedule import Section

"""JSON document emitter and post-parse validation."""

__all__ = [
    "DocumentWriteError",
    "to_document",
    "write_document",
    "validate_sections",
]


class DocumentWriteError(Exception):
    pass


def to_document(run: ImportRun, sections: list[Section]) -> dict[str, Any]:
    return {
        "title": run.title,
        "year": run.year,
        "source_file": run.source_file,
        "parsed_at": run.parsed_at_iso,
        "sections": [s.to_dict() for s in sections],
    }


def write_document(path: Path, document: dict[str, Any]) -> Path:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(document, ensure_ascii=False, indent=2), encoding="utf-8")
    except OSError as e:
        raise DocumentWriteError(f"cannot write {path}: {e}") from e
    return path


def validate_sections(sections: list[Section]) -> list[str]:
    """Sanity checks over a finished tree. Never raises; returns warnings."""
    warnings: list[str] = []
    for sec in sections:
        tag = f"[{sec.item_no}]"
        if not sec.title:
            warnings.append(f"{tag} missing title")
        if sec.rate is None and sec.item_count == 0:
            warnings.append(f"{tag} no rate entries found")
        for item in sec.iter_items():
            if item.rate is None:
                warnings.append(f"{tag} item {item.id} ({item.dimension}) has no rate")
            elif isinstance(item.rate, Real) and item.rate < 0:
                warnings.append(f"{tag} item {item.id} has negative rate {item.rate}")
    return warnings
