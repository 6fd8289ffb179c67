from __future__ import annotations

from enum import Enum


class KanbanType(str, Enum):
    """Supported kanban sources."""
    TRELLO = "trello"
    JIRA = "jira"


class StorageType(str, Enum):
    """Supported snapshot stores."""
    LOCAL = "local"
    SQL = "sql"
    MEMORY = "memory"


class OutputMode(str, Enum):
    """Burndown chart output formats."""
    CSV = "csv"
    ASCII = "ascii"
    SVG = "svg"


class ScoreStatus(str, Enum):
    """How a card title was scored."""
    SCORED = "scored"
    UNSCORED = "unscored"
    MALFORMED = "malformed"


TOTAL_ROW_NAME = "TOTAL"
DEFAULT_DONE_LIST_MARKER = "Done"

# dd-mm-yy, the format downstream plotting tools expect
CSV_DATE_FORMAT = "%d-%m-%y"
ISO_DATE_FORMAT = "%Y-%m-%d"

CONTENT_TYPES = {
    OutputMode.CSV: "text/csv",
    OutputMode.ASCII: "text/plain",
    OutputMode.SVG: "image/svg+xml",
}
