# book_summary/api.py
from __future__ import annotations

import logging
from pathlib import Path

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse
from fastapi.staticfiles import StaticFiles

from book_summary.config import Settings, load_settings
from book_summary.pipeline import MSG_ERROR, SummaryContext, describe_settings, summarize_book
from book_summary.schemas import SummaryRequest, SummaryResponse
from book_summary.services.llm import TextGenerator
from book_summary.tools.catalog import GoogleBooksCatalog

log = logging.getLogger("book-summary")

STATIC_DIR = Path(__file__).resolve().parent / "static"


def build_context(settings: Settings) -> SummaryContext:
    """Build the shared clients once; they are read-only afterwards."""
    return SummaryContext(
        settings=settings,
        catalog=GoogleBooksCatalog(api_key=settings.google_books_key, timeout=settings.catalog_timeout),
        generator=TextGenerator(model=settings.chat_model, timeout=settings.llm_timeout),
    )


def create_app(ctx: SummaryContext | None = None) -> FastAPI:
    """
    One FastAPI app. Pass a ready context (tests do); otherwise it is built from
    the environment at startup.
    """
    settings = ctx.settings if ctx else load_settings()
    app = FastAPI(title="Book Summary API")
    app.state.ctx = ctx

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    if STATIC_DIR.is_dir():
        app.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")

    @app.on_event("startup")
    def _startup():
        if app.state.ctx is None:
            app.state.ctx = build_context(settings)
        log.info("Book summary ready: %s", describe_settings(app.state.ctx.settings))

    # The frontend always expects JSON with the summary shape, never a 422.
    @app.exception_handler(RequestValidationError)
    async def _invalid_body(request: Request, exc: RequestValidationError):
        log.info("Rejected request body: %s", exc.errors())
        body = SummaryResponse(found=False, error="Invalid request body.")
        return JSONResponse(status_code=200, content=body.model_dump(by_alias=True))

    # -------- Summary --------
    @app.post("/api/summary", response_model=SummaryResponse)
    def summary(req: SummaryRequest, request: Request):
        try:
            return summarize_book(req.title, req.style, req.num, request.app.state.ctx)
        except Exception:
            log.exception("ERROR /api/summary")
            return SummaryResponse(found=False, corrected_title=None, intro=MSG_ERROR, error=MSG_ERROR)

    @app.get("/api/health")
    def health(request: Request):
        return {"status": "ok", **describe_settings(request.app.state.ctx.settings)}

    @app.get("/", include_in_schema=False)
    def index():
        page = STATIC_DIR / "index.html"
        if not page.is_file():
            raise HTTPException(404, "Frontend not installed")
        return FileResponse(page)

    return app
