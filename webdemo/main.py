"""
Web demo app
Handles: routing, query/header/cookie/path params, forms, uploads, body
parsing, JSON responses, downloads, route groups, static files, templates
and the central error handler.
Port: 3000
"""

import multiprocessing
import os
import shutil
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import APIRouter, Cookie, FastAPI, File, Form, Header, Request, UploadFile
from fastapi.responses import FileResponse, PlainTextResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates

from webdemo.binding import decode_json, parse_body
from webdemo.config import Settings
from webdemo.exceptions import BodyParseError, install_error_handlers
from webdemo.middleware import PrefixLoggingMiddleware, RequestTimeoutMiddleware
from webdemo.models import LoginRequest, RegisterRequest
from webdemo.responses import SortedJSONResponse

SAMPLE_FILE = "contoh.txt"


def is_child_process() -> bool:
    """True when running inside a worker forked by the uvicorn supervisor."""
    return multiprocessing.parent_process() is not None


async def hello_world():
    return "Hello, World!"


def build_groups() -> list[APIRouter]:
    groups = []
    for prefix in ("/api", "/web"):
        router = APIRouter(prefix=prefix, default_response_class=PlainTextResponse)
        router.add_api_route("/hello", hello_world, methods=["GET"])
        router.add_api_route("/world", hello_world, methods=["GET"])
        groups.append(router)
    return groups


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings.from_env()

    # ── App ───────────────────────────────────────────────────────────────────
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        print(f"[web-demo] Started on {settings.host}:{settings.port}")
        print("[web-demo] Child process" if is_child_process() else "[web-demo] Parent process")
        yield

    app = FastAPI(
        title="Web Demo",
        version="1.0.0",
        lifespan=lifespan,
        default_response_class=SortedJSONResponse,
    )
    app.state.settings = settings

    install_error_handlers(app)
    app.add_middleware(RequestTimeoutMiddleware, timeout=settings.request_timeout)
    app.add_middleware(PrefixLoggingMiddleware, prefix="/api")

    templates = Jinja2Templates(directory=settings.template_dir)

    # ── Endpoints ─────────────────────────────────────────────────────────────

    @app.get("/", response_class=PlainTextResponse)
    async def root():
        return "Hello, World!"

    @app.get("/hello", response_class=PlainTextResponse)
    async def hello(name: str = "World"):
        return f"Hello, {name}"

    @app.get("/request", response_class=PlainTextResponse)
    async def request_info(firstname: str = Header(""), lastname: str = Cookie("")):
        return f"Hello, {firstname} {lastname}"

    @app.get("/users/{user_id}/orders/{order_id}", response_class=PlainTextResponse)
    async def user_order(user_id: str, order_id: str):
        return f"Data User {user_id} with order id {order_id}"

    @app.post("/hello", response_class=PlainTextResponse)
    async def hello_form(name: str = Form("")):
        return f"Hello {name}"

    @app.post("/upload", response_class=PlainTextResponse)
    def upload(file: UploadFile = File(...)):
        # keep only the basename so uploads can't escape the target dir
        filename = os.path.basename(file.filename or "")
        if not filename:
            raise BodyParseError("uploaded file has no filename")

        os.makedirs(settings.target_dir, exist_ok=True)
        with open(os.path.join(settings.target_dir, filename), "wb") as out:
            shutil.copyfileobj(file.file, out)
        return "Upload Success"

    @app.post("/login", response_class=PlainTextResponse)
    async def login(request: Request):
        try:
            body = LoginRequest.model_validate(decode_json(await request.body()))
        except ValueError as e:
            raise BodyParseError(str(e)) from e
        return f"Hello {body.username}"

    @app.post("/register", response_class=PlainTextResponse)
    async def register(request: Request):
        body = await parse_body(request, RegisterRequest)
        return f"Register Success {body.username}"

    @app.get("/user")
    async def user():
        return {"username": "Salman", "password": "123"}

    @app.get("/download")
    async def download():
        return FileResponse(os.path.join(settings.source_dir, SAMPLE_FILE), filename=SAMPLE_FILE)

    @app.get("/error")
    async def error():
        raise Exception("Ups")

    @app.get("/view")
    async def view(request: Request):
        return templates.TemplateResponse(
            request,
            "index.html",
            {
                "Title": "Hello World",
                "Header": "Hello, World!",
                "Content": "This is content",
            },
        )

    for group in build_groups():
        app.include_router(group)

    app.mount("/public", StaticFiles(directory=settings.source_dir, check_dir=False), name="public")

    return app


app = create_app()
