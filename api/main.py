import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import ORJSONResponse

from api.routes import treasury, governance, sanctions, protocol
from config import LOG_LEVEL
from src.observability import configure_logging, API_REQUESTS_TOTAL

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(LOG_LEVEL)
    logger.info("API starting")
    yield


app = FastAPI(
    lifespan=lifespan,
    title="AGORA Governance Dashboard API",
    description="Read-only API over the AGORA treasury, proposals, sanctions and protocol stats.",
    version="1.0.0",
    default_response_class=ORJSONResponse
)

# CORS Configuration
# Allow all origins so static dashboard pages can read the API locally.
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def count_requests(request: Request, call_next):
    response = await call_next(request)
    route = request.scope.get("route")
    if route is None:
        endpoint = "unmatched"
    else:
        # route paths are relative to the router they were mounted under
        endpoint = request.scope.get("root_path", "") + route.path_format
    API_REQUESTS_TOTAL.labels(endpoint=endpoint).inc()
    return response


# Register Routers
app.include_router(treasury.router, prefix="/treasury", tags=["Treasury"])
app.include_router(governance.router, prefix="/governance", tags=["Governance"])
app.include_router(sanctions.router, prefix="/sanctions", tags=["Sanctions"])
app.include_router(protocol.router, prefix="/protocol", tags=["Protocol"])

@app.get("/health", tags=["Health"])
async def health_check():
    """
    Simple health check endpoint.
    """
    return {"status": "ok", "service": "agora-governance-api"}

if __name__ == "__main__":
    import uvicorn
    from config import METRICS_PORT
    from src.observability import start_metrics_server

    start_metrics_server(METRICS_PORT)
    logger.info("Starting API on port 8000")
    uvicorn.run("api.main:app", host="0.0.0.0", port=8000, reload=True)
