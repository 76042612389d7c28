"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from turf_talent.config import evidence_config, settings
from turf_talent.errors import TurfTalentError, ValidationError
from turf_talent.routers import applications, evidence, jobs, profiles, skill_claims, skills
from turf_talent.services.evidence_store import LocalEvidenceStore

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create long-lived handles once per process."""
    app.state.evidence_store = LocalEvidenceStore(config=evidence_config)
    logger.info("Evidence store rooted at %s", settings.evidence_root)
    yield


app = FastAPI(
    title="Turf Talent API",
    description="Backend API connecting turf specialists with golf courses and sports facilities",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS middleware to allow the frontend to call the API
app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:5173", settings.frontend_url],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(TurfTalentError)
async def handle_domain_error(request: Request, exc: TurfTalentError) -> JSONResponse:
    """Translate service-layer errors into JSON error responses."""
    logger.warning("%s on %s %s: %s", type(exc).__name__, request.method, request.url.path, exc)
    content: dict = {"detail": str(exc), "error": type(exc).__name__}
    if isinstance(exc, ValidationError) and exc.field:
        content["field"] = exc.field
    return JSONResponse(status_code=exc.status_code, content=content)


# Mount routers
for module in (skills, skill_claims, evidence, profiles, jobs, applications):
    app.include_router(module.router, prefix=settings.api_prefix)


def serve() -> None:
    """Run the API with uvicorn using the configured host and port."""
    import uvicorn

    uvicorn.run(app, host=settings.backend_host, port=settings.backend_port)


if __name__ == "__main__":
    serve()
