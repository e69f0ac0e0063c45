"""Import service: request parsing, preview and project creation for database imports."""
import json
import logging
from typing import Any, Dict, List, Mapping, Optional

from dbimport.api.db.session import SessionLocal
from dbimport.api.services.project_service import ProjectService
from dbimport.connectors.exceptions import DatabaseServiceException
from dbimport.connectors.schemas import DatabaseConfiguration, DatabaseQueryInfo
from dbimport.core.config import settings
from dbimport.importing.importer import DatabaseImporter
from dbimport.importing.job import ImportingJob
from dbimport.importing.project import Project, ProjectMetadata


logger = logging.getLogger(__name__)

OPTIONS_KEY = "options"


def respond(status: str, message: str) -> Dict[str, Any]:
    return {"status": status, "message": message}


def error_to_dict(error: Exception) -> Dict[str, Any]:
    if isinstance(error, DatabaseServiceException):
        return error.to_dict()
    return {"message": str(error)}


def get_query_info(parameters: Mapping[str, str]) -> Optional[DatabaseQueryInfo]:
    """Build the query info from request parameters; None when anything required is missing."""
    port_param = (parameters.get("databasePort") or "").strip()
    try:
        port = int(port_param) if port_param else 0
    except ValueError:
        logger.info(f"Invalid database port: {port_param}")
        return None

    db_config = DatabaseConfiguration(
        connection_name=parameters.get("connectionName"),
        database_type=parameters.get("databaseType"),
        database_host=parameters.get("databaseServer"),
        database_port=port,
        database_user=parameters.get("databaseUser"),
        database_password=parameters.get("databasePassword"),
        database_name=parameters.get("initialDatabase"),
        database_schema=parameters.get("initialSchema"),
        use_ssl=(parameters.get("useSSL") or "").strip().lower() == "true",
    )
    query = parameters.get("query")

    if (db_config.database_host is None or db_config.database_name is None
            or db_config.database_password is None or db_config.database_type is None
            or db_config.database_user is None or query is None or not query.strip()):
        logger.info(f"Missing database configuration: {db_config}")
        return None

    return DatabaseQueryInfo(db_config=db_config, query=query)


def parse_options(raw: Optional[str]) -> Dict[str, Any]:
    """Parse the JSON options parameter; blank means no options."""
    if raw is None or not raw.strip():
        return {}
    options = json.loads(raw)
    if not isinstance(options, dict):
        raise ValueError("options must be a JSON object")
    return options


def initialize_parser_ui() -> Dict[str, Any]:
    result = {
        "status": "ok",
        OPTIONS_KEY: {
            "skipDataLines": 0,
            "storeBlankRows": True,
            "storeBlankCellsAsNulls": True,
        },
    }
    logger.info(f"initialize-parser-ui: {result}")
    return result


def run_preview(job: ImportingJob, query_info: DatabaseQueryInfo, options: Dict[str, Any]) -> Dict[str, Any]:
    """
    Parse the first DEFAULT_PREVIEW_LIMIT rows into the job's project.

    DatabaseServiceException from the connectors propagates to the caller.
    """
    job.updating = True
    try:
        exceptions: List[Exception] = []
        job.prepare_new_project()

        DatabaseImporter.parse(
            query_info,
            job.project,
            job.metadata,
            job,
            settings.DEFAULT_PREVIEW_LIMIT,
            options,
            exceptions
        )

        if not exceptions:
            job.project.update()
            return {"status": "ok"}
        return {"status": "error", "errors": [error_to_dict(e) for e in exceptions]}
    finally:
        job.touch()
        job.updating = False


def create_project_background(job: ImportingJob, query_info: DatabaseQueryInfo, options: Dict[str, Any]):
    """Background task: import every row and register the project."""
    db = SessionLocal()
    exceptions: List[Exception] = []
    project = Project()
    metadata = ProjectMetadata(
        name=options.get("projectName") or "Untitled",
        encoding=options.get("encoding") or "UTF-8",
    )

    try:
        logger.info(f"Creating project for import job {job.id}")
        try:
            DatabaseImporter.parse(query_info, project, metadata, job, -1, options, exceptions)
        except DatabaseServiceException as e:
            logger.error(f"Import job {job.id} failed: {e.message}")
            exceptions.append(e)

        if job.canceled:
            logger.info(f"Import job {job.id} was canceled")
        elif exceptions:
            job.set_error(exceptions)
        else:
            project.update()
            ProjectService(db).register_project(project, metadata)
            job.set_state(ImportingJob.STATE_CREATED_PROJECT)
            job.set_project_id(project.id)
            logger.info(f"Import job {job.id} created project {project.id}")

    except Exception as e:
        logger.error(f"Import job {job.id} failed while storing the project: {str(e)}")
        job.set_error([e])

    finally:
        job.touch()
        job.updating = False
        db.close()
