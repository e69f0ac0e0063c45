"""API routes for database connections, ad hoc queries and saved connections."""
import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from dbimport.api.db.database import get_db
from dbimport.api.models.database import (
    DatabaseConnectionRequest,
    DatabaseQueryRequest,
    SavedConnectionCreate,
    SavedConnectionUpdate,
    SavedConnectionResponse,
)
from dbimport.api.services.connection_service import (
    SavedConnectionError,
    SavedConnectionExists,
    SavedConnectionService,
)
from dbimport.connectors.exceptions import DatabaseServiceException
from dbimport.connectors.service_factory import DatabaseServiceFactory


router = APIRouter(prefix="/database", tags=["database"])
logger = logging.getLogger(__name__)


def service_error(e: DatabaseServiceException) -> HTTPException:
    logger.error(f"Database service error: {e.message}")
    return HTTPException(status_code=400, detail=e.to_dict())


@router.post("/connect")
def connect(request: DatabaseConnectionRequest):
    """Connect and return the server's product metadata."""
    db_config = request.to_configuration()
    try:
        service = DatabaseServiceFactory.get(db_config.database_type)
        database_info = service.connect(db_config)
    except DatabaseServiceException as e:
        raise service_error(e)
    return {"code": "ok", "databaseInfo": database_info.to_dict()}


@router.post("/test-connect")
def test_connect(request: DatabaseConnectionRequest):
    """Test database connection without keeping it."""
    db_config = request.to_configuration()
    try:
        service = DatabaseServiceFactory.get(db_config.database_type)
        connection_result = service.test_connection(db_config)
    except DatabaseServiceException as e:
        raise service_error(e)
    return {"code": "ok", "connectionResult": connection_result}


@router.post("/execute-query")
def execute_query(request: DatabaseQueryRequest):
    """Run a query and return all of its columns and rows."""
    db_config = request.to_configuration()
    try:
        service = DatabaseServiceFactory.get(db_config.database_type)
        database_info = service.execute_query(db_config, request.query)
    except DatabaseServiceException as e:
        raise service_error(e)

    result = database_info.to_dict()
    return {"code": "ok", "queryResult": {"columns": result["columns"], "rows": result["rows"]}}


@router.post("/test-query")
def test_query(request: DatabaseQueryRequest):
    """Check that the server accepts a query."""
    db_config = request.to_configuration()
    try:
        service = DatabaseServiceFactory.get(db_config.database_type)
        database_info = service.test_query(db_config, request.query)
    except DatabaseServiceException as e:
        raise service_error(e)
    return {"code": "ok", "queryResult": database_info.to_dict()}


@router.get("/saved-connections", response_model=List[SavedConnectionResponse])
def get_saved_connections(db: Session = Depends(get_db)):
    """List saved connections, without passwords."""
    return SavedConnectionService(db).list_connections()


@router.get("/saved-connections/{connection_name}", response_model=SavedConnectionResponse)
def get_saved_connection(connection_name: str, db: Session = Depends(get_db)):
    """Get one saved connection, including its password."""
    try:
        connection = SavedConnectionService(db).get_connection(connection_name)
    except SavedConnectionError as e:
        raise HTTPException(status_code=500, detail=str(e))

    if not connection:
        raise HTTPException(status_code=404, detail="Saved connection not found")
    return connection


@router.post("/saved-connections", response_model=SavedConnectionResponse, status_code=201)
def add_saved_connection(request: SavedConnectionCreate, db: Session = Depends(get_db)):
    try:
        return SavedConnectionService(db).add_connection(request)
    except SavedConnectionExists as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.put("/saved-connections/{connection_name}", response_model=SavedConnectionResponse)
def edit_saved_connection(connection_name: str, update_data: SavedConnectionUpdate,
                          db: Session = Depends(get_db)):
    connection = SavedConnectionService(db).edit_connection(connection_name, update_data)
    if not connection:
        raise HTTPException(status_code=404, detail="Saved connection not found")
    return connection


@router.delete("/saved-connections/{connection_name}", status_code=204)
def delete_saved_connection(connection_name: str, db: Session = Depends(get_db)):
    if not SavedConnectionService(db).delete_connection(connection_name):
        raise HTTPException(status_code=404, detail="Saved connection not found")
