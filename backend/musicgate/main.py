import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from musicgate.errors import MusicGateError
from musicgate.responses import AttributedJSONResponse
from musicgate.routers import cover, generate, task
from musicgate.services.validation import format_errors

logging.basicConfig(level=logging.INFO)

logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, content-type",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
}

app = FastAPI(
    title="MusicGate API",
    version="0.1.0",
    default_response_class=AttributedJSONResponse,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def short_circuit_options(request: Request, call_next):
    if request.method == "OPTIONS":
        return Response(status_code=204, headers=CORS_HEADERS)
    return await call_next(request)


@app.exception_handler(MusicGateError)
async def musicgate_error_handler(request: Request, exc: MusicGateError):
    return AttributedJSONResponse(status_code=exc.status_code, content=exc.to_body())


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    return AttributedJSONResponse(
        status_code=400,
        content={"ok": False, "message": "Invalid request", "errors": format_errors(exc.errors())},
    )


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return AttributedJSONResponse(
        status_code=exc.status_code,
        content={"ok": False, "message": exc.detail},
        headers=exc.headers,
    )


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return AttributedJSONResponse(status_code=500, content={"ok": False, "message": str(exc) or "Internal error"})


app.include_router(generate.router)
app.include_router(task.router)
app.include_router(cover.router)


@app.get("/health")
async def health():
    return {"status": "ok"}
