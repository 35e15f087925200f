"""Radar drafts — YAML files describing a radar to submit.

Example draft:
    id: 123456
    title: "Crash when opening settings"
    classification: "Crash/Hang/Data Loss"
    product: "iOS"
    reproducibility: "Always"
    version: "17.1"
    summary: "The app crashes."
    steps: "1. Open settings"
    expected: "Settings open"
    actual: "Crash"
    configuration: "iPhone 15"
    notes: ""
    attachments:
      - crash.log          # relative to the draft file
"""

from pathlib import Path
from typing import Any

import yaml

from sonar.models import (
    Attachment,
    AttachmentError,
    Classification,
    Product,
    Radar,
    Reproducibility,
)


class DraftError(Exception):
    """Raised when a draft file is missing or invalid."""


def load_draft(draft_path: str) -> Radar:
    """Read *draft_path* and return the Radar it describes.

    Raises:
        DraftError: missing file, bad YAML, bad id, or an unusable attachment.
    """
    path = Path(draft_path)
    if not path.exists():
        raise DraftError(f"Draft file not found: '{draft_path}'")

    try:
        with path.open(encoding="utf-8") as f:
            raw = yaml.safe_load(f)
    except yaml.YAMLError as exc:
        raise DraftError(f"Failed to parse '{draft_path}': {exc}") from exc

    if not isinstance(raw, dict):
        raise DraftError(f"'{draft_path}' must be a YAML mapping at the top level.")

    radar_id = raw.get("id")
    if radar_id is not None and (isinstance(radar_id, bool) or not isinstance(radar_id, int)):
        raise DraftError(f"'id' must be an integer, got {radar_id!r}")

    return Radar(
        id=radar_id,
        classification=Classification.from_name(raw.get("classification")),
        product=Product.from_name(raw.get("product")),
        reproducibility=Reproducibility.from_name(raw.get("reproducibility")),
        title=_text(raw, "title"),
        description=_text(raw, "summary"),
        steps=_text(raw, "steps"),
        expected=_text(raw, "expected"),
        actual=_text(raw, "actual"),
        configuration=_text(raw, "configuration"),
        version=_text(raw, "version"),
        notes=_text(raw, "notes"),
        attachments=_attachments(raw.get("attachments") or [], base=path.parent),
    )


def _text(raw: dict[str, Any], key: str) -> str:
    value = raw.get(key)
    return "" if value is None else str(value)


def _attachments(paths: Any, base: Path) -> list[Attachment]:
    if not isinstance(paths, list):
        raise DraftError("'attachments' must be a list of file paths")

    attachments = []
    for entry in paths:
        file_path = base / str(entry)
        try:
            attachments.append(Attachment.from_path(file_path))
        except AttachmentError as exc:
            raise DraftError(f"Cannot attach '{entry}': {exc}") from exc
        except OSError as exc:
            raise DraftError(f"Cannot read attachment '{entry}': {exc}") from exc
    return attachments
