"""System Prompt Preview Web Interface.

FastAPI service that renders the agent system prompt for a partial
customization, plus the async client config editors use to call it.

Example usage:
    # Programmatic
    from libreclaw.interfaces.web import create_app, run_web

    app = create_app("config.yml")  # For ASGI servers
    run_web(port=8787)

    # CLI
    libreclaw prompt serve --port 8787
"""

from libreclaw.interfaces.web.app import create_app, run_web
from libreclaw.interfaces.web.preview_client import PreviewState, SystemPromptPreviewClient

__all__ = ["PreviewState", "SystemPromptPreviewClient", "create_app", "run_web"]
