from fastapi import FastAPI, HTTPException, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
import uvicorn
import logging
from hoodscout.api.router import api_router
from hoodscout.config.settings import settings
from hoodscout.database.session import dispose_engine


# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper()),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[
        logging.StreamHandler()
    ]
)

logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifecycle manager for the FastAPI application."""
    try:
        logger.info("Starting Hood Scout API...")
        yield
    finally:
        logger.info("Shutting down Hood Scout API...")
        await dispose_engine()

app = FastAPI(
    title=settings.PROJECT_NAME,
    description="API for the Hood Scout application that ranks neighborhoods for a user profile.",
    version="0.1.0",
    lifespan=lifespan
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Custom exception handler for HTTPException
@app.exception_handler(HTTPException)
async def http_exception_handler(request, exc):
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "detail": exc.detail,
            "status_code": exc.status_code
        }
    )

# Generic exception handler
@app.exception_handler(Exception)
async def generic_exception_handler(request, exc):
    logger.error(f"Unhandled exception: {str(exc)}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={
            "detail": "Internal server error",
            "status_code": 500
        }
    )

# Include routers
app.include_router(api_router, prefix="/api")

@app.get("/", status_code=status.HTTP_200_OK, tags=["Health Check"])
def health_check():
    """
    Endpoint for load balancer health checks.
    """
    return {"status": "ok", "message": "Hood Scout API is healthy"}

if __name__ == "__main__":
    uvicorn.run(
        "hoodscout.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level=settings.LOG_LEVEL.lower(),
        access_log=True
    )
