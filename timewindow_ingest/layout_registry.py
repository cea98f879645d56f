"""
Layout registry for timewindow-ingest.

Loads layout YAML files from timewindow_ingest/layouts/ and provides
structured access via Pydantic models. Each layout defines:
- tag: which ``LayoutTag`` it describes
- columns: the exact column count every row must have
- title / description / example_rows / column_notes: text for the
  layout guide shown when a batch cannot be classified
- requires_window: whether the caller must supply ``window_seconds``

Why YAML instead of hardcoded:
- The user-facing layout guide is plain data and easy to edit.
- Column counts used by the row parsers and the guide come from one place,
  so the help text cannot drift from what the parsers enforce.
"""

from __future__ import annotations

import logging
from enum import Enum
from functools import lru_cache
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from timewindow_ingest.exceptions import UnknownLayoutError

logger = logging.getLogger(__name__)

# Directory containing layout YAML files (sibling package)
_LAYOUTS_DIR = Path(__file__).parent / "layouts"

_GUIDE_NOTES = (
    "Comments starting with # are ignored",
    'Quoted fields supported: "2025-07-26 00:49:16","5"',
    "Empty rows are ignored",
    "Time spans are centred on the timestamp (single column and timestamp + span)",
    "Naive timestamps (no Z or offset) are read as UTC",
)


class LayoutTag(str, Enum):
    """Batch-level classification of a tabular input."""

    SINGLE_COLUMN_UNIFORM = "single_column_uniform"
    TIMESTAMP_PLUS_DURATION = "timestamp_plus_duration"
    START_AND_END = "start_and_end"
    MIXED = "mixed"
    UNKNOWN = "unknown"

    @property
    def is_concrete(self) -> bool:
        """True for the three tags that rows can actually be parsed under."""
        return self not in (LayoutTag.MIXED, LayoutTag.UNKNOWN)


# Guide order; also the order load_all_layouts() returns
_TAG_ORDER = {tag: i for i, tag in enumerate(LayoutTag)}


class LayoutSpec(BaseModel):
    """A row layout definition loaded from YAML."""

    model_config = ConfigDict(frozen=True)

    tag: LayoutTag
    columns: int = Field(..., ge=1)
    title: str
    description: str = ""
    requires_window: bool = False
    example_rows: tuple[str, ...] = ()
    column_notes: tuple[str, ...] = ()


def load_layout(path: Path) -> LayoutSpec:
    """Load a single layout YAML file."""
    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f)
    spec = LayoutSpec.model_validate(raw)
    if not spec.tag.is_concrete:
        raise ValueError(f"Layout file cannot describe the '{spec.tag.value}' tag")
    return spec


def load_all_layouts(layouts_dir: Path | None = None) -> list[LayoutSpec]:
    """Load all layout YAML files, sorted in ``LayoutTag`` order.

    Files that fail to load are logged and skipped.
    """
    layouts_dir = layouts_dir or _LAYOUTS_DIR
    layouts: list[LayoutSpec] = []
    for yaml_path in sorted(layouts_dir.glob("*.yaml")):
        try:
            layout = load_layout(yaml_path)
        except (OSError, yaml.YAMLError, ValidationError, ValueError) as e:
            logger.warning("Failed to load layout from %s: %s", yaml_path, e)
            continue
        layouts.append(layout)
        logger.debug("Loaded layout: %s from %s", layout.tag.value, yaml_path)
    layouts.sort(key=lambda l: _TAG_ORDER[l.tag])
    return layouts


@lru_cache(maxsize=1)
def _builtin_layouts() -> tuple[LayoutSpec, ...]:
    layouts = tuple(load_all_layouts())
    logger.info("Loaded %d built-in layouts", len(layouts))
    return layouts


def get_layout(tag: LayoutTag) -> LayoutSpec:
    """Return the built-in definition for a concrete layout tag.

    Raises:
        UnknownLayoutError: If ``tag`` is MIXED/UNKNOWN or has no layout file.
    """
    for layout in _builtin_layouts():
        if layout.tag is tag:
            return layout
    raise UnknownLayoutError(f"No layout definition for '{tag.value}'")


def layout_guide(layouts: list[LayoutSpec] | None = None) -> str:
    """Render the human-readable guide to the supported row layouts."""
    if layouts is None:
        layouts = list(_builtin_layouts())

    lines = ["Tabular Input Format Guide", "", "Supported row layouts:"]
    for i, layout in enumerate(layouts, start=1):
        heading = f"FORMAT {i}: {layout.title}"
        lines += ["", heading, "-" * len(heading)]
        if layout.description:
            lines.append(layout.description)
        if layout.requires_window:
            lines.append("Required: window_seconds in the config")
        lines.append("Content:")
        lines += [f"  {row}" for row in layout.example_rows]
        lines += layout.column_notes
    lines += ["", "NOTES:"]
    lines += [f"  * {note}" for note in _GUIDE_NOTES]
    return "\n".join(lines)
