"""Section slicing for OpenRadar description text.

OpenRadar stores the body of a report as a single blob with human-written
headers ("Summary:", "Steps to Reproduce:", ...). This module recovers each
section by slicing between two header literals, and rebuilds such a blob from
a Radar for submission.

Known limitations:
    - Markers are case-sensitive literals.
    - Matching is greedy: if an end marker occurs more than once, the section
      runs up to its last occurrence.
"""

import re
from enum import Enum
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from sonar.models import Radar


class Marker(str, Enum):
    SUMMARY = "Summary:"
    STEPS = "Steps to Reproduce:"
    EXPECTED = "Expected Results:"
    ACTUAL = "Actual Results:"
    OBSERVED = "Observed Results:"
    VERSION = "Version:"
    NOTES = "Notes:"
    CONFIGURATION = "Configuration:"
    END = ""


# Radar field -> (begin, end) pairs tried in order; first match wins.
SECTION_CATALOG: tuple[tuple[str, tuple[tuple[Marker, Marker], ...]], ...] = (
    ("description", (
        (Marker.SUMMARY, Marker.STEPS),
    )),
    ("steps", (
        (Marker.STEPS, Marker.EXPECTED),
    )),
    ("expected", (
        (Marker.EXPECTED, Marker.ACTUAL),
        (Marker.EXPECTED, Marker.OBSERVED),
    )),
    ("actual", (
        (Marker.ACTUAL, Marker.VERSION),
        (Marker.OBSERVED, Marker.VERSION),
    )),
    ("configuration", (
        (Marker.CONFIGURATION, Marker.NOTES),
        (Marker.CONFIGURATION, Marker.END),
    )),
    ("notes", (
        (Marker.NOTES, Marker.CONFIGURATION),
        (Marker.NOTES, Marker.END),
    )),
)


def match(text: str, pattern: str, group: int = 1, flags: int = 0) -> Optional[str]:
    """Return the whitespace-trimmed text of *group* in the first match of *pattern*.

    Returns None when the pattern does not compile, nothing matches, or the
    match has no such group.
    """
    try:
        found = re.search(pattern, text, flags)
    except re.error:
        return None
    if found is None:
        return None
    try:
        captured = found.group(group)
    except IndexError:
        return None
    return (captured or "").strip()


def extract_section(text: str, begin: str, end: str) -> Optional[str]:
    """Return the text between the *begin* and *end* literals, or None if absent.

    An empty *end* runs the section to the end of *text*.
    """
    pattern = f"{re.escape(begin)}(.*){re.escape(end)}"
    return match(text, pattern, group=1, flags=re.DOTALL)


def first_section(text: str, attempts) -> Optional[str]:
    """Try each (begin, end) pair in turn and return the first section found."""
    for begin, end in attempts:
        section = extract_section(text, begin.value, end.value)
        if section is not None:
            return section
    return None


def extract_sections(text: str) -> dict[str, Optional[str]]:
    """Slice *text* into every catalogued section; absent sections map to None."""
    return {name: first_section(text, attempts) for name, attempts in SECTION_CATALOG}


def compose_description(radar: "Radar") -> str:
    """Rebuild the section-headed description blob for *radar*."""
    blocks = (
        (Marker.SUMMARY, radar.description),
        (Marker.STEPS, radar.steps),
        (Marker.EXPECTED, radar.expected),
        (Marker.ACTUAL, radar.actual),
        (Marker.VERSION, radar.version),
        (Marker.CONFIGURATION, radar.configuration),
        (Marker.NOTES, radar.notes),
    )
    return "\n\n".join(f"{marker.value}\n{body.strip()}" for marker, body in blocks) + "\n"
