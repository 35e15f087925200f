"""Data models for OpenRadar tickets.

Contains:
    - Classification / Product / Reproducibility   closed enums with total lookups
    - Attachment                                   immutable file payload
    - Radar                                        a single bug report
"""

import mimetypes
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Optional


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------

class AttachmentError(Exception):
    """Base exception for attachment construction errors."""


class InvalidMimeTypeError(AttachmentError):
    """Raised when no MIME type is registered for a file extension."""

    def __init__(self, file_extension: str) -> None:
        super().__init__(f"No MIME type found for extension '{file_extension}'")
        self.file_extension = file_extension


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

def _lookup(members, raw: Any):
    """Return the member whose display name matches *raw* case-insensitively, or None."""
    wanted = raw.strip().lower() if isinstance(raw, str) else ""
    for member in members:
        if member.value.lower() == wanted:
            return member
    return None


class Classification(Enum):
    SECURITY = "Security"
    CRASH = "Crash/Hang/Data Loss"
    POWER = "Power"
    PERFORMANCE = "Performance"
    UI_USABILITY = "UI/Usability"
    SERIOUS_BUG = "Serious Bug"
    OTHER_BUG = "Other Bug"
    FEATURE = "Feature (New)"
    ENHANCEMENT = "Enhancement"

    @classmethod
    def from_name(cls, raw: Any) -> "Classification":
        """Resolve a raw display name; unknown values become Enhancement."""
        return _lookup(cls, raw) or cls.ENHANCEMENT


class Product(Enum):
    IOS = "iOS"
    IOS_SDK = "iOS SDK"
    MACOS = "macOS"
    MACOS_SDK = "macOS SDK"
    MACOS_SERVER = "macOS Server"
    TVOS = "tvOS"
    TVOS_SDK = "tvOS SDK"
    WATCHOS = "watchOS"
    WATCHOS_SDK = "watchOS SDK"
    XCODE = "Xcode"
    XCODE_SERVER = "Xcode Server"
    SAFARI = "Safari"
    ICLOUD = "iCloud"
    DOCUMENTATION = "Documentation"
    DEVELOPER_TOOLS = "Developer Tools"
    APP_STORE_CONNECT = "App Store Connect"
    OTHER = "Other"

    @classmethod
    def from_name(cls, raw: Any) -> "Product":
        """Resolve a raw display name; unknown values become iOS."""
        return _lookup(cls, raw) or cls.IOS


class Reproducibility(Enum):
    ALWAYS = "Always"
    SOMETIMES = "Sometimes"
    RARELY = "Rarely"
    UNABLE = "Unable"
    DID_NOT_TRY = "I Didn't Try"
    NOT_APPLICABLE = "Not Applicable"

    @classmethod
    def from_name(cls, raw: Any) -> "Reproducibility":
        """Resolve a raw display name; unknown values become Always."""
        return _lookup(cls, raw) or cls.ALWAYS


# ---------------------------------------------------------------------------
# Attachment
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Attachment:
    filename: str
    mime_type: str = field(compare=False)
    data: bytes = field(repr=False)

    @property
    def size(self) -> int:
        return len(self.data)

    @classmethod
    def from_path(cls, path: str | Path) -> "Attachment":
        """Build an attachment from a local file.

        The MIME type is resolved from the extension before the file is read,
        so an unknown extension never leaves a half-built attachment.

        Raises:
            InvalidMimeTypeError: no type is registered for the extension
            OSError:              the file cannot be read
        """
        path = Path(path)
        mime_type, _ = mimetypes.guess_type(path.name)
        if mime_type is None:
            raise InvalidMimeTypeError(path.suffix.lstrip("."))
        return cls(filename=path.name, mime_type=mime_type, data=path.read_bytes())


# ---------------------------------------------------------------------------
# Radar
# ---------------------------------------------------------------------------

@dataclass
class Radar:
    classification: Classification
    product: Product
    reproducibility: Reproducibility
    title: str
    description: str
    steps: str
    expected: str
    actual: str
    configuration: str
    version: str
    notes: str = " "
    attachments: list[Attachment] = field(default_factory=list)
    id: Optional[int] = None

    def __post_init__(self) -> None:
        # empty notes read as a missing field on submission
        if not self.notes:
            self.notes = " "

    def to_dict(self) -> dict[str, Any]:
        """Render the radar as JSON-friendly primitives."""
        return {
            "id":              self.id,
            "title":           self.title,
            "classification":  self.classification.value,
            "product":         self.product.value,
            "reproducibility": self.reproducibility.value,
            "version":         self.version,
            "summary":         self.description,
            "steps":           self.steps,
            "expected":        self.expected,
            "actual":          self.actual,
            "configuration":   self.configuration,
            "notes":           self.notes,
            "attachments": [
                {"filename": a.filename, "mime_type": a.mime_type, "size": a.size}
                for a in self.attachments
            ],
        }
