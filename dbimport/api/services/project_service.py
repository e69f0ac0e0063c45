"""Project store: persists imported projects and serves their rows."""
import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from dbimport.api.db.models import ProjectRecord, ProjectRowRecord
from dbimport.importing.project import Project, ProjectMetadata


logger = logging.getLogger(__name__)


class ProjectService:
    """Service for storing and reading projects."""

    def __init__(self, db: Session):
        self.db = db

    def register_project(self, project: Project, metadata: ProjectMetadata) -> ProjectRecord:
        """Persist a project and all of its rows."""
        record = ProjectRecord(
            id=project.id,
            name=metadata.name,
            encoding=metadata.encoding,
            source=metadata.source,
            columns=list(project.columns),
            row_count=len(project.rows),
            created_at=metadata.created,
        )
        record.rows = [
            ProjectRowRecord(row_index=index, cells=list(cells))
            for index, cells in enumerate(project.rows)
        ]

        self.db.add(record)
        self.db.commit()
        self.db.refresh(record)

        logger.info(f"Registered project {record.id} ({record.name}) with {record.row_count} rows")
        return record

    def get_project(self, project_id: str) -> Optional[ProjectRecord]:
        """Get project by ID."""
        return self.db.query(ProjectRecord).filter(ProjectRecord.id == project_id).first()

    def list_projects(self) -> List[ProjectRecord]:
        return self.db.query(ProjectRecord).order_by(ProjectRecord.created_at.desc()).all()

    def get_rows(self, project_id: str, skip: int = 0, limit: int = 100) -> List[Dict[str, Any]]:
        rows = (
            self.db.query(ProjectRowRecord)
            .filter(ProjectRowRecord.project_id == project_id)
            .order_by(ProjectRowRecord.row_index)
            .offset(skip)
            .limit(limit)
            .all()
        )
        return [{'index': row.row_index, 'cells': row.cells} for row in rows]

    def delete_project(self, project_id: str) -> bool:
        project = self.get_project(project_id)
        if not project:
            return False

        self.db.delete(project)
        self.db.commit()
        return True
