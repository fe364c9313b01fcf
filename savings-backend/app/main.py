import logging
from datetime import datetime, timezone
from time import perf_counter
from uuid import uuid4

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import ORJSONResponse

from .config import settings
from .errors import register_error_handlers
from .routers import assistant, export, mock, projection, recommendations, spend

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)

logger = logging.getLogger(__name__)

APP_VERSION = "0.1.0"
REQUEST_ID_HEADER = "X-Request-ID"

app = FastAPI(
    title="Savings Dashboard Backend",
    version=APP_VERSION,
    default_response_class=ORJSONResponse,
)

# Dashboard dev servers run on arbitrary localhost ports
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=[REQUEST_ID_HEADER],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid4())
    request.state.request_id = request_id
    quiet = request.url.path == "/health"
    started = perf_counter()

    if not quiet:
        logger.info("Request received: %s %s requestId=%s", request.method, request.url.path, request_id)

    response = await call_next(request)
    response.headers[REQUEST_ID_HEADER] = request_id

    if not quiet:
        duration_ms = round((perf_counter() - started) * 1000, 2)
        if response.status_code >= 500:
            log = logger.error
        elif response.status_code >= 400:
            log = logger.warning
        else:
            log = logger.info
        log(
            "Request completed: %s %s status=%s durationMs=%s requestId=%s",
            request.method,
            request.url.path,
            response.status_code,
            duration_ms,
            request_id,
        )
    return response


register_error_handlers(app)

app.include_router(spend.router)
app.include_router(projection.router)
app.include_router(recommendations.router)
app.include_router(assistant.router)
app.include_router(export.router)
app.include_router(mock.router)


@app.get("/health")
def health():
    return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}


@app.get("/")
def root():
    return {"message": "Savings dashboard API", "version": APP_VERSION, "mockMode": settings.use_mocks}
