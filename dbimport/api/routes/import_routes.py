"""API routes for the database import controller and import jobs."""
import logging
from typing import Dict

from fastapi import APIRouter, BackgroundTasks, HTTPException, Request
from fastapi.concurrency import run_in_threadpool

from dbimport.api.services import import_service
from dbimport.api.services.import_service import respond
from dbimport.connectors.exceptions import DatabaseServiceException
from dbimport.core.config import settings
from dbimport.importing.job import ImportingJob, importing_manager


router = APIRouter(prefix="/importing", tags=["importing"])
logger = logging.getLogger(__name__)


async def parse_request_parameters(request: Request) -> Dict[str, str]:
    """Query string parameters overlaid with form fields."""
    parameters = dict(request.query_params)
    content_type = request.headers.get("content-type", "")
    if content_type.startswith(("application/x-www-form-urlencoded", "multipart/form-data")):
        form = await request.form()
        for key, value in form.items():
            if isinstance(value, str):
                parameters[key] = value
    return parameters


@router.get("/database-import-controller")
async def database_import_controller_get():
    return respond("error", "GET not implemented")


@router.post("/database-import-controller")
async def database_import_controller(request: Request, background_tasks: BackgroundTasks):
    """
    Dispatch an import sub-command.

    Sub-commands: initialize-parser-ui, parse-preview, create-project.
    """
    parameters = await parse_request_parameters(request)
    sub_command = parameters.get("subCommand")
    logger.info(f"database-import-controller subCommand: {sub_command}, "
                f"databaseName: {parameters.get('initialDatabase')}")

    if sub_command == "initialize-parser-ui":
        return import_service.initialize_parser_ui()
    elif sub_command == "parse-preview":
        return await parse_preview(parameters)
    elif sub_command == "create-project":
        return create_project(parameters, background_tasks)
    else:
        return respond("error", "No such sub command")


async def parse_preview(parameters: Dict[str, str]):
    logger.info(f"parse-preview for job {parameters.get('jobID')}")

    job = importing_manager.get_job(parameters.get("jobID"))
    if job is None:
        return respond("error", "No such import job")

    query_info = import_service.get_query_info(parameters)
    if query_info is None:
        return respond("error", "Invalid or missing Query Info")

    try:
        options = import_service.parse_options(parameters.get("options"))
    except ValueError as e:
        return respond("error", f"Invalid options: {str(e)}")

    try:
        return await run_in_threadpool(import_service.run_preview, job, query_info, options)
    except DatabaseServiceException as e:
        logger.error(f"parse-preview failed: {e.message}")
        return respond("error", e.message)


def create_project(parameters: Dict[str, str], background_tasks: BackgroundTasks):
    logger.info(f"create-project for job {parameters.get('jobID')}")

    job = importing_manager.get_job(parameters.get("jobID"))
    if job is None:
        return respond("error", "No such import job")

    query_info = import_service.get_query_info(parameters)
    if query_info is None:
        return respond("error", "Invalid or missing Query Info")

    try:
        options = import_service.parse_options(parameters.get("options"))
    except ValueError as e:
        return respond("error", f"Invalid options: {str(e)}")

    job.updating = True
    job.set_state(ImportingJob.STATE_CREATING_PROJECT)
    background_tasks.add_task(import_service.create_project_background, job, query_info, options)

    return respond("ok", "done")


@router.post("/jobs", status_code=201)
async def create_importing_job():
    """Create an import job."""
    importing_manager.cleanup_stale_jobs(settings.JOB_MAX_AGE_SECONDS)
    job = importing_manager.create_job()
    return {"jobID": job.id}


@router.get("/jobs/{job_id}")
async def get_importing_job_status(job_id: int):
    """Get job state, progress and the preview rows."""
    job = importing_manager.get_job(job_id)
    if not job:
        raise HTTPException(status_code=404, detail="No such import job")
    return job.to_dict(settings.DEFAULT_PREVIEW_LIMIT)


@router.post("/jobs/{job_id}/cancel")
async def cancel_importing_job(job_id: int):
    job = importing_manager.get_job(job_id)
    if not job:
        raise HTTPException(status_code=404, detail="No such import job")
    job.cancel()
    return {"jobID": job.id, "canceled": True}


@router.delete("/jobs/{job_id}", status_code=204)
async def dispose_importing_job(job_id: int):
    if not importing_manager.dispose_job(job_id):
        raise HTTPException(status_code=404, detail="No such import job")
