"""Reads the result of a database query into a project."""
import logging
import math
from typing import Any, Dict, Iterator, List, Optional

from dbimport.connectors.exceptions import DatabaseServiceException
from dbimport.connectors.interfaces import DatabaseServiceInterface
from dbimport.connectors.schemas import DatabaseColumn, DatabaseColumnType, DatabaseQueryInfo, DatabaseRow
from dbimport.connectors.service_factory import DatabaseServiceFactory
from dbimport.core.config import settings
from dbimport.importing.job import ImportingJob
from dbimport.importing.project import Project, ProjectMetadata


logger = logging.getLogger(__name__)


def get_int(options: Dict[str, Any], key: str, default: int) -> int:
    value = options.get(key, default)
    if isinstance(value, bool):
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def get_bool(options: Dict[str, Any], key: str, default: bool) -> bool:
    value = options.get(key, default)
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() == "true"
    return default


def is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def convert_cell(value: Optional[str], column_type: DatabaseColumnType) -> Any:
    """Type a cell from its column; values that don't parse stay strings."""
    if value is None:
        return None
    try:
        if column_type == DatabaseColumnType.NUMBER:
            return int(value)
        if column_type in (DatabaseColumnType.DOUBLE, DatabaseColumnType.FLOAT):
            number = float(value)
            # NaN and Infinity have no JSON form
            return number if math.isfinite(number) else value
    except ValueError:
        logger.debug(f"Keeping {value!r} as text for a {column_type.value} column")
    return value


class DatabaseImporter:

    @staticmethod
    def parse(
        query_info: DatabaseQueryInfo,
        project: Project,
        metadata: ProjectMetadata,
        job: ImportingJob,
        limit: int,
        options: Dict[str, Any],
        exceptions: List[Exception]
    ) -> None:
        """
        Run the query and fill ``project`` with its rows.

        A positive ``limit`` reads a single preview page of that many rows;
        otherwise the whole result is read in pages of IMPORT_BATCH_SIZE.
        Column lookup failures raise DatabaseServiceException; failures while
        reading rows are appended to ``exceptions``.
        """
        db_config = query_info.db_config
        service = DatabaseServiceFactory.get(db_config.database_type)
        query_source = DatabaseImporter.get_query_source(query_info)
        metadata.source = query_source

        try:
            columns = service.get_columns(db_config, query_info.query)
            DatabaseImporter.set_progress(job, query_source, -1)

            if limit > 0:
                pages = DatabaseImporter._preview_pages(service, query_info, limit)
            else:
                pages = DatabaseImporter._import_pages(
                    service, query_info, job, query_source, settings.IMPORT_BATCH_SIZE
                )

            DatabaseImporter.read_table(project, job, columns, pages, limit, options, exceptions)
        finally:
            service.close_connection()

        DatabaseImporter.set_progress(job, query_source, 100)

    @staticmethod
    def read_table(
        project: Project,
        job: ImportingJob,
        columns: List[DatabaseColumn],
        pages: Iterator[List[DatabaseRow]],
        limit: int,
        options: Dict[str, Any],
        exceptions: List[Exception]
    ) -> None:
        """Copy rows into the project honouring the parser options."""
        skip_data_lines = max(get_int(options, "skipDataLines", 0), 0)
        store_blank_rows = get_bool(options, "storeBlankRows", True)
        store_blank_cells_as_nulls = get_bool(options, "storeBlankCellsAsNulls", True)

        limits = [value for value in (limit, get_int(options, "limit", -1)) if value > 0]
        row_limit = min(limits) if limits else None

        for column in columns:
            project.add_column(column.label or column.name)

        skipped = 0
        stored = 0
        try:
            for page in pages:
                for row in page:
                    if job is not None and job.canceled:
                        return
                    if skipped < skip_data_lines:
                        skipped += 1
                        continue

                    cells = []
                    non_blank = False
                    for position, column in enumerate(columns):
                        value = row.values[position] if position < len(row.values) else None
                        if is_blank(value):
                            cells.append(None if store_blank_cells_as_nulls else "")
                        else:
                            non_blank = True
                            cells.append(convert_cell(value, column.type))

                    if non_blank or store_blank_rows:
                        project.add_row(cells)
                        stored += 1
                        if row_limit is not None and stored >= row_limit:
                            return
        except DatabaseServiceException as e:
            logger.error(f"Failed reading rows: {e.message}")
            exceptions.append(e)

    @staticmethod
    def get_query_source(query_info: DatabaseQueryInfo) -> str:
        return query_info.db_config.database_name or query_info.db_config.database_host or "database"

    @staticmethod
    def set_progress(job: Optional[ImportingJob], query_source: str, percent: int) -> None:
        if job is not None:
            job.set_progress(percent, f"Reading {query_source}")

    @staticmethod
    def _preview_pages(service: DatabaseServiceInterface, query_info: DatabaseQueryInfo,
                       limit: int) -> Iterator[List[DatabaseRow]]:
        query = service.build_limit_query(limit, 0, query_info.query)
        yield service.get_rows(query_info.db_config, query)

    @staticmethod
    def _import_pages(service: DatabaseServiceInterface, query_info: DatabaseQueryInfo,
                      job: Optional[ImportingJob], query_source: str,
                      batch_size: int) -> Iterator[List[DatabaseRow]]:
        offset = 0
        while job is None or not job.canceled:
            query = service.build_limit_query(batch_size, offset, query_info.query)
            rows = service.get_rows(query_info.db_config, query)
            if rows:
                yield rows

            offset += len(rows)
            if job is not None:
                job.set_progress(-1, f"Reading {query_source} ({offset} rows)")
            # a short page ends the result; an oversized one means the LIMIT was not applied
            if len(rows) != batch_size:
                break
