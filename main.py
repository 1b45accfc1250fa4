from fastapi import FastAPI
from datasources.config import settings
from datasources.database.manager import database_lifespan
from datasources.exceptions.handler import register_exception_handlers
from datasources.logging.logger import LogConfig
from datasources.middleware.logging_md import LoggingMiddleware
from apps.catalog.api.router import router as catalog_router

app = FastAPI(
    title=settings.APP_NAME,
    description="Course catalog served through the datasources repositories",
    version="1.0.0",
    lifespan=database_lifespan,
)

# Initialize logging configuration
LogConfig.setup_logging()

# Register global exception handlers
register_exception_handlers(app)

app.add_middleware(LoggingMiddleware)

app.include_router(
    catalog_router,
    prefix=settings.API_V1_CATALOG_PREFIX,
    tags=["Catalog"]
)

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
