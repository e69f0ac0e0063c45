"""Import jobs and the registry that tracks them."""
import itertools
import logging
import threading
import time
from typing import Any, Dict, List, Optional

from dbimport.importing.project import Project, ProjectMetadata


logger = logging.getLogger(__name__)


class ImportingJob:
    """State of one import, from preview through project creation."""

    STATE_NEW = "new"
    STATE_CREATING_PROJECT = "creating-project"
    STATE_CREATED_PROJECT = "created-project"
    STATE_ERROR = "error"

    def __init__(self, job_id: int):
        self.id = job_id
        self.state = self.STATE_NEW
        self.updating = False
        self.canceled = False
        self.project: Optional[Project] = None
        self.metadata: Optional[ProjectMetadata] = None
        self.project_id: Optional[str] = None
        self.errors: List[Dict[str, Any]] = []
        self.progress: Dict[str, Any] = {'percent': 0, 'message': ''}
        self.last_touched = time.time()
        self._lock = threading.Lock()

    def prepare_new_project(self) -> None:
        """Start over with an empty preview project."""
        with self._lock:
            self.project = Project()
            self.metadata = ProjectMetadata()

    def set_state(self, state: str) -> None:
        with self._lock:
            self.state = state

    def set_progress(self, percent: int, message: str) -> None:
        with self._lock:
            self.progress = {'percent': percent, 'message': message}

    def set_project_id(self, project_id: str) -> None:
        with self._lock:
            self.project_id = project_id

    def set_error(self, exceptions: List[Exception]) -> None:
        with self._lock:
            self.errors = [{'message': str(e)} for e in exceptions]
            self.state = self.STATE_ERROR

    def touch(self) -> None:
        self.last_touched = time.time()

    def cancel(self) -> None:
        self.canceled = True

    def to_dict(self, preview_limit: Optional[int] = None) -> Dict[str, Any]:
        with self._lock:
            return {
                'jobID': self.id,
                'state': self.state,
                'updating': self.updating,
                'canceled': self.canceled,
                'progress': dict(self.progress),
                'projectID': self.project_id,
                'errors': list(self.errors),
                'metadata': self.metadata.to_dict() if self.metadata else None,
                'preview': self.project.to_dict(preview_limit) if self.project else None,
            }


class ImportingManager:
    """Thread-safe registry of the jobs in this process."""

    def __init__(self):
        self.jobs: Dict[int, ImportingJob] = {}
        self._ids = itertools.count(int(time.time() * 1000))
        self._lock = threading.Lock()

    def create_job(self) -> ImportingJob:
        with self._lock:
            job = ImportingJob(next(self._ids))
            self.jobs[job.id] = job
        logger.info(f"Created import job {job.id}")
        return job

    def get_job(self, job_id) -> Optional[ImportingJob]:
        try:
            key = int(job_id)
        except (TypeError, ValueError):
            return None
        with self._lock:
            return self.jobs.get(key)

    def dispose_job(self, job_id) -> bool:
        job = self.get_job(job_id)
        if job is None:
            return False
        job.cancel()
        with self._lock:
            self.jobs.pop(job.id, None)
        logger.info(f"Disposed import job {job.id}")
        return True

    def cleanup_stale_jobs(self, max_age_seconds: int) -> int:
        """Dispose jobs untouched for longer than max_age_seconds; returns how many."""
        cutoff = time.time() - max_age_seconds
        with self._lock:
            stale = [job for job in self.jobs.values() if not job.updating and job.last_touched < cutoff]
            for job in stale:
                job.cancel()
                del self.jobs[job.id]
        if stale:
            logger.info(f"Disposed {len(stale)} stale import jobs")
        return len(stale)

    def clear(self) -> None:
        with self._lock:
            for job in self.jobs.values():
                job.cancel()
            self.jobs.clear()


importing_manager = ImportingManager()
