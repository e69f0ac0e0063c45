"""Import jobs, the in-memory project model and the database importer."""
from .importer import DatabaseImporter
from .job import ImportingJob, ImportingManager, importing_manager
from .project import Project, ProjectMetadata

__all__ = [
    'DatabaseImporter',
    'ImportingJob',
    'ImportingManager',
    'importing_manager',
    'Project',
    'ProjectMetadata',
]
