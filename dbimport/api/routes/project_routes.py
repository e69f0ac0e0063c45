"""API routes for imported projects."""
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from dbimport.api.db.database import get_db
from dbimport.api.models.database import ProjectRowsResponse, ProjectSummaryResponse
from dbimport.api.services.project_service import ProjectService


router = APIRouter(prefix="/projects", tags=["projects"])


@router.get("", response_model=List[ProjectSummaryResponse])
def get_projects(db: Session = Depends(get_db)):
    return ProjectService(db).list_projects()


@router.get("/{project_id}", response_model=ProjectSummaryResponse)
def get_project(project_id: str, db: Session = Depends(get_db)):
    project = ProjectService(db).get_project(project_id)
    if not project:
        raise HTTPException(status_code=404, detail="Project not found")
    return project


@router.get("/{project_id}/rows", response_model=ProjectRowsResponse)
def get_project_rows(
    project_id: str,
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=10000),
    db: Session = Depends(get_db)
):
    """Get a page of project rows."""
    service = ProjectService(db)
    project = service.get_project(project_id)
    if not project:
        raise HTTPException(status_code=404, detail="Project not found")

    return ProjectRowsResponse(
        project_id=project.id,
        columns=project.columns,
        total=project.row_count,
        rows=service.get_rows(project_id, skip=skip, limit=limit),
    )


@router.delete("/{project_id}", status_code=204)
def delete_project(project_id: str, db: Session = Depends(get_db)):
    if not ProjectService(db).delete_project(project_id):
        raise HTTPException(status_code=404, detail="Project not found")
