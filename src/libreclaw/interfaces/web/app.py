"""System Prompt Preview Service - FastAPI Application.

Serves live previews of the agent system prompt for config editors: the
client posts a partial ``systemPrompt`` block and receives the prompt the
agent would get with that customization.
"""

from __future__ import annotations

from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from libreclaw import __version__
from libreclaw.interfaces.web.api.schemas import HealthResponse, PreviewResponse
from libreclaw.prompts import get_section_registry
from libreclaw.prompts.settings import AgentPromptSettings
from libreclaw.utils.logger import get_logger

logger = get_logger("preview")


def _format_request_errors(exc: RequestValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        message = error.get("msg", "invalid value")
        parts.append(f"{location}: {message}" if location else message)
    return "Malformed preview request: " + "; ".join(parts)


def create_app(
    config_path: str | Path | None = None,
    settings: AgentPromptSettings | None = None,
) -> FastAPI:
    """Create the preview service FastAPI application.

    App factory for ASGI servers and testing. Settings are resolved eagerly
    so the app works without running the lifespan.

    Args:
        config_path: Optional path to config.yml. Ignored when ``settings`` is given.
        settings: Explicit agent prompt settings (tests, embedding)

    Returns:
        Configured FastAPI application instance.
    """
    from libreclaw.interfaces.web.api.routes import router as api_router

    if settings is None:
        settings = AgentPromptSettings.from_config(str(config_path) if config_path else None)

    app = FastAPI(
        title="LibreClaw System Prompt Preview",
        description="Live preview of the assembled agent system prompt",
        version=__version__,
    )
    app.state.preview_settings = settings

    # CORS for the config UI dev server
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        """Report malformed payloads in the preview response shape."""
        message = _format_request_errors(exc)
        logger.warning(message)
        return JSONResponse(
            status_code=400,
            content=PreviewResponse(ok=False, error=message).model_dump(exclude_none=True),
        )

    app.include_router(api_router)

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        """Simple health check endpoint."""
        return HealthResponse(
            status="healthy",
            version=__version__,
            sections=len(get_section_registry()),
            workspace=app.state.preview_settings.resolved_workspace_dir,
        )

    logger.info(f"Preview service ready for workspace {settings.resolved_workspace_dir}")
    return app


def run_web(
    host: str = "127.0.0.1",
    port: int = 8787,
    reload: bool = False,
    config_path: str | None = None,
) -> None:
    """Run the preview service.

    Args:
        host: Host to bind to.
        port: Port to run on.
        reload: Enable auto-reload for development.
        config_path: Optional path to config file.
    """
    import uvicorn

    if reload:
        # Reload mode needs an import string; the factory reads CONFIG_FILE
        uvicorn.run(
            "libreclaw.interfaces.web.app:create_app",
            factory=True,
            host=host,
            port=port,
            reload=reload,
            log_level="info",
        )
    else:
        app = create_app(config_path)
        uvicorn.run(app, host=host, port=port, log_level="info")
