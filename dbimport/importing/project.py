"""In-memory project filled by the importer before it is handed to the project store."""
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional


@dataclass
class ProjectMetadata:
    name: str = "Untitled"
    encoding: str = "UTF-8"
    source: Optional[str] = None
    created: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'encoding': self.encoding,
            'source': self.source,
            'created': self.created.isoformat(),
        }


class Project:
    """Column names plus rows of typed cells."""

    def __init__(self, project_id: Optional[str] = None):
        self.id = project_id or str(uuid.uuid4())
        self.columns: List[str] = []
        self.rows: List[List[Any]] = []
        self.row_count = 0
        self.column_widths: Dict[str, int] = {}

    def add_column(self, name: str) -> str:
        """Add a column, suffixing the name with ' 2', ' 3', ... when it is taken."""
        base = name if name else f"Column {len(self.columns) + 1}"
        candidate = base
        suffix = 2
        while candidate in self.columns:
            candidate = f"{base} {suffix}"
            suffix += 1
        self.columns.append(candidate)
        return candidate

    def add_row(self, cells: List[Any]) -> None:
        self.rows.append(cells)

    def update(self) -> None:
        """Refresh derived state after rows were added."""
        self.row_count = len(self.rows)
        widths = {}
        for position, column in enumerate(self.columns):
            widths[column] = max(
                [len(column)] + [len(str(row[position])) for row in self.rows
                                 if position < len(row) and row[position] is not None]
            )
        self.column_widths = widths

    def to_dict(self, limit: Optional[int] = None) -> Dict[str, Any]:
        rows = self.rows if limit is None else self.rows[:limit]
        return {
            'id': self.id,
            'columns': list(self.columns),
            'rows': [list(row) for row in rows],
            'rowCount': len(self.rows),
        }
