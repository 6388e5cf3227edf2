"""System prompt CLI commands.

``libreclaw prompt build`` renders the configured agent's system prompt,
``libreclaw prompt sections`` lists the addressable section ids and
``libreclaw prompt serve`` runs the live preview service.

Command-line options override the matching ``agents.defaults.systemPrompt``
values from config.yml; everything else comes from the config file.
"""

import json
import sys
from dataclasses import replace
from pathlib import Path

import click
from rich.markup import escape
from rich.table import Table

from libreclaw.cli.styles import Messages, Styles, console, err_console
from libreclaw.prompts import (
    CompositionState,
    ConfigValidationError,
    RuntimeEnvironmentError,
    build_agent_system_prompt,
    get_section_registry,
    load_system_prompt_config,
    merge_system_prompt_config,
    resolve_composition_state,
)
from libreclaw.prompts.settings import AgentPromptSettings
from libreclaw.utils.logger import get_logger

logger = get_logger("cli")


@click.group("prompt")
def prompt() -> None:
    """Build, inspect and preview the agent system prompt."""


@prompt.command("build")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    help="Path to config.yml (default: CONFIG_FILE or ./config.yml)",
)
@click.option("--workspace", "workspace_dir", help="Agent workspace directory")
@click.option("--docs-path", help="Local documentation path")
@click.option("--mode", type=click.Choice(["default", "replace"]), help="Composition mode")
@click.option(
    "--allow-unsafe-replace",
    is_flag=True,
    help="Allow replace mode to discard the generated prompt",
)
@click.option(
    "--remove-section",
    "remove_sections",
    multiple=True,
    help="Section id to remove (repeatable; replaces the configured list)",
)
@click.option("--prepend", help="Text placed before the generated prompt")
@click.option("--append", "append_text", help="Text placed after the generated prompt")
@click.option(
    "--safety-style", type=click.Choice(["libreclaw", "openclaw"]), help="Safety section wording"
)
@click.option("--no-context-files", is_flag=True, help="Do not inject workspace bootstrap files")
@click.option(
    "--output",
    "-o",
    "output_path",
    type=click.Path(dir_okay=False, writable=True),
    help="Write the prompt to a file instead of stdout",
)
def build(
    config_path,
    workspace_dir,
    docs_path,
    mode,
    allow_unsafe_replace,
    remove_sections,
    prepend,
    append_text,
    safety_style,
    no_context_files,
    output_path,
) -> None:
    """Build the agent system prompt.

    Examples:

    \b
      libreclaw prompt build
      libreclaw prompt build --remove-section heartbeats --remove-section runtime
      libreclaw prompt build --safety-style openclaw -o prompt.md
    """
    try:
        settings = AgentPromptSettings.from_config(config_path)
        config = merge_system_prompt_config(
            load_system_prompt_config(config_path),
            {
                "mode": mode,
                "allowUnsafeReplace": True if allow_unsafe_replace else None,
                "removeSections": list(remove_sections) if remove_sections else None,
                "prepend": prepend,
                "append": append_text,
                "safetyStyle": safety_style,
            },
        )

        if workspace_dir:
            settings = replace(settings, workspace_dir=workspace_dir)
        if docs_path:
            settings = replace(settings, docs_path=docs_path)
        if no_context_files:
            settings = replace(settings, inject_context_files=False)

        state = resolve_composition_state(config)
        context_files = (
            settings.load_context_files() if state.uses_generated_prompt else ()
        )
        if state is CompositionState.REPLACE_BLOCKED:
            err_console.print(
                Messages.warning("Replace mode ignored: pass --allow-unsafe-replace to enable it")
            )

        system_prompt = build_agent_system_prompt(
            settings.resolved_workspace_dir,
            context_files=context_files,
            docs_path=settings.docs_path,
            model_alias_lines=settings.model_alias_lines,
            system_prompt_config=config,
            **settings.context_fields,
        )
    except (ConfigValidationError, RuntimeEnvironmentError) as e:
        err_console.print(Messages.error(escape(e.message)), highlight=False, soft_wrap=True)
        sys.exit(1)

    if output_path:
        Path(output_path).write_text(system_prompt + "\n", encoding="utf-8")
        err_console.print(Messages.success(f"System prompt written to {Messages.path(escape(output_path))}"), soft_wrap=True)
    else:
        click.echo(system_prompt)


@prompt.command("sections")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["table", "json"]),
    default="table",
    show_default=True,
    help="Output format",
)
def sections(output_format: str) -> None:
    """List the section ids accepted by removeSections, in rendering order."""
    catalogue = get_section_registry().catalogue()

    if output_format == "json":
        click.echo(json.dumps(catalogue, indent=2))
        return

    table = Table(title="System Prompt Sections", border_style=Styles.BORDER, header_style=Styles.HEADER)
    table.add_column("#", justify="right", style="dim")
    table.add_column("ID", style=Styles.ACCENT)
    table.add_column("Title", style=Styles.LABEL)
    table.add_column("Description")
    for position, entry in enumerate(catalogue, start=1):
        table.add_row(str(position), entry["id"], entry["title"], entry["description"])
    console.print(table)


@prompt.command("serve")
@click.option("--host", default="127.0.0.1", show_default=True, help="Host to bind to")
@click.option("--port", default=8787, show_default=True, type=int, help="Port to run on")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    help="Path to config.yml",
)
@click.option("--reload", is_flag=True, help="Enable auto-reload (development)")
def serve(host: str, port: int, config_path: str | None, reload: bool) -> None:
    """Run the system prompt preview web service."""
    from libreclaw.interfaces.web import run_web

    logger.key_info(f"Starting preview service on http://{host}:{port}")
    run_web(host=host, port=port, reload=reload, config_path=config_path)
