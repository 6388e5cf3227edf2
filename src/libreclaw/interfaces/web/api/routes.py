"""System prompt preview API routes.

Preview responses always carry ``ok``; clients render ``error`` instead of
treating failures as fatal.
"""

from __future__ import annotations

import time
from typing import TYPE_CHECKING

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from libreclaw.interfaces.web.api.schemas import (
    PreviewRequest,
    PreviewResponse,
    SectionResponse,
    SectionsResponse,
)
from libreclaw.prompts import (
    ConfigValidationError,
    PromptEngineError,
    build_agent_system_prompt,
    get_section_registry,
    resolve_composition_state,
    validate_system_prompt_config,
)
from libreclaw.utils.logger import get_logger

if TYPE_CHECKING:
    from libreclaw.prompts.settings import AgentPromptSettings

logger = get_logger("preview")

router = APIRouter(prefix="/api/system-prompt")


def preview_error(message: str, status_code: int) -> JSONResponse:
    """JSON failure body in the preview response shape."""
    return JSONResponse(
        status_code=status_code,
        content=PreviewResponse(ok=False, error=message).model_dump(exclude_none=True),
    )


@router.post("/preview", response_model=PreviewResponse, response_model_exclude_none=True)
def preview_system_prompt(request: Request, preview_req: PreviewRequest):
    """Render the system prompt for a (partial) customization.

    Sync handler: FastAPI runs it in the threadpool.

    Returns 400 for invalid customization and 500 when the server-side
    context cannot be resolved.
    """
    settings: AgentPromptSettings = request.app.state.preview_settings
    start_time = time.time()

    try:
        config = validate_system_prompt_config(preview_req.system_prompt or {})
        state = resolve_composition_state(config)
        prompt = build_agent_system_prompt(
            settings.resolved_workspace_dir,
            context_files=settings.load_context_files() if state.uses_generated_prompt else (),
            docs_path=settings.docs_path,
            model_alias_lines=settings.model_alias_lines,
            system_prompt_config=config,
            **settings.context_fields,
        )
    except ConfigValidationError as e:
        logger.warning(f"Rejected preview request: {e.message}")
        return preview_error(e.message, 400)
    except PromptEngineError as e:
        logger.error(f"Preview failed: {e.message}")
        return preview_error(e.message, 500)
    except Exception as e:
        logger.error(f"Unexpected preview failure: {e}", exc_info=True)
        return preview_error(str(e), 500)

    logger.timing(f"Preview rendered in {int((time.time() - start_time) * 1000)} ms")
    return PreviewResponse(ok=True, prompt=prompt)


@router.get("/sections", response_model=SectionsResponse)
async def list_sections() -> SectionsResponse:
    """Return the section catalogue (ids, titles, descriptions) in rendering order."""
    return SectionsResponse(
        sections=[SectionResponse(**entry) for entry in get_section_registry().catalogue()]
    )
