from datetime import datetime, timezone

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from assessment_platform.config import get_settings
from assessment_platform.core.exceptions import InconsistentInputError
from assessment_platform.core.logging import configure_logging
from assessment_platform.models.assessment import ErrorResponse
from assessment_platform.routers.health import router as health_router
from assessment_platform.routers.scoring import router as scoring_router

load_dotenv()

settings = get_settings()
configure_logging(settings.LOG_LEVEL, settings.LOG_FORMAT)


# SWAGGER UI: tag display order
_OPENAPI_TAGS = [
    {"name": "Root"},
    {"name": "Health"},
    {"name": "Assessment Scoring"},
]

# FASTAPI APPLICATION CONFIGURATION
app = FastAPI(
    title="Candidate Assessment Scoring API",
    version=settings.APP_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    openapi_tags=_OPENAPI_TAGS,
)

app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"])


# REGISTER EXCEPTION HANDLERS
async def inconsistent_input_handler(request: Request, exc: InconsistentInputError):
    body = ErrorResponse(
        error_code="INCONSISTENT_INPUT",
        message=exc.message,
        details={
            "error_type": type(exc).__name__,
            "candidate_id": exc.candidate_id,
            "question_id": exc.question_id,
        },
        timestamp=datetime.now(timezone.utc),
    )
    return JSONResponse(
        status_code=422,
        content=body.model_dump(mode="json"),
    )


app.add_exception_handler(InconsistentInputError, inconsistent_input_handler)

# REGISTER ROUTERS
app.include_router(health_router)           # Health
app.include_router(scoring_router, prefix=settings.API_V1_PREFIX)   # Assessment Scoring


# ROOT ENDPOINT
@app.get("/", tags=["Root"], summary="Root endpoint")
async def root():
    return {
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "docs": {
            "swagger": "/docs",
            "redoc": "/redoc"
        },
        "status": "running"
    }


# RUN WITH UVICORN
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "assessment_platform.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
    )
