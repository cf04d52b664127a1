import logging

from fastapi import APIRouter, FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from eskom_api.config import settings
from eskom_api.errors import CalendarError

logger = logging.getLogger(__name__)


def configure_logging():
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


configure_logging()

app = FastAPI(
    title="Eskom Calendar API",
    description="Loadshedding outages and recurring schedules from eskom-calendar",
    version=settings.api_version.lstrip("v"),
)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, PATCH, PUT, DELETE, HEAD, OPTIONS, GET",
    "Access-Control-Allow-Headers": "*",
    "Access-Control-Allow-Credentials": "true",
}


@app.middleware("http")
async def permissive_cors(request: Request, call_next):
    """Stamp CORS headers on every response and answer bare OPTIONS requests."""
    if request.method == "OPTIONS":
        response = Response(status_code=204)
    else:
        response = await call_next(request)
    response.headers.update(CORS_HEADERS)
    return response


# Added last so it wraps the middleware above and answers preflights first
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(CalendarError)
async def calendar_error_handler(request: Request, exc: CalendarError):
    level = logging.WARNING if exc.status_code >= 500 else logging.INFO
    logger.log(level, "%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


from eskom_api.routers import areas, outages, schedules  # noqa: E402

# "latest" and the pinned version share one set of handlers
api_router = APIRouter()
api_router.include_router(outages.router)
api_router.include_router(schedules.router)
api_router.include_router(areas.router)

app.include_router(api_router)
app.include_router(api_router, prefix=f"/{settings.api_version}")


@app.get("/health")
async def health():
    return {"status": "ok"}


def run():
    import uvicorn
    uvicorn.run("eskom_api.main:app", host="0.0.0.0", port=8000)
