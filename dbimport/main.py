from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from dbimport.core.config import settings
from dbimport.core.logging import setup_logging
from dbimport.api.db.database import instantiate_db
from dbimport.api.routes import database_routes, import_routes, project_routes
from dbimport.connectors.service_factory import DatabaseServiceFactory


def create_application() -> FastAPI:
    """Create FastAPI application."""
    setup_logging()

    application = FastAPI(
        title=settings.PROJECT_NAME,
        description=settings.PROJECT_DESCRIPTION,
        version=settings.VERSION,
        openapi_url=f"{settings.API_V1_STR}/openapi.json",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Set up CORS middleware
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routers
    application.include_router(import_routes.router, prefix=settings.API_V1_STR)
    application.include_router(database_routes.router, prefix=settings.API_V1_STR)
    application.include_router(project_routes.router, prefix=settings.API_V1_STR)

    @application.get("/")
    def root():
        """Root endpoint."""
        return {"message": "Database import service"}

    @application.get("/health")
    def health():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "service": "database-import",
            "version": settings.VERSION,
            "databases": [db_type.value for db_type in DatabaseServiceFactory.get_supported_databases()],
        }

    return application


app = create_application()
instantiate_db()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("dbimport.main:app", host="0.0.0.0", port=8000, reload=True)
