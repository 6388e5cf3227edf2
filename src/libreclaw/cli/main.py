"""Main CLI entry point for LibreClaw.

Uses lazy imports so that ``libreclaw --help`` does not load FastAPI,
uvicorn or the prompt engine until a command is actually invoked.
"""

import importlib
import sys

import click

from libreclaw import __version__


class LazyGroup(click.Group):
    """Click group that lazily loads subcommands only when invoked."""

    # command name -> (module path, attribute)
    COMMANDS = {
        "prompt": ("libreclaw.cli.prompt_cmd", "prompt"),
    }

    def get_command(self, ctx, cmd_name):
        """Lazily import and return the command when it's invoked."""
        if cmd_name not in self.COMMANDS:
            return None
        module_path, attribute = self.COMMANDS[cmd_name]
        mod = importlib.import_module(module_path)
        return getattr(mod, attribute)

    def list_commands(self, ctx):
        """Return list of available commands (for --help)."""
        return sorted(self.COMMANDS)


@click.group(cls=LazyGroup)
@click.version_option(version=__version__, prog_name="libreclaw")
def cli():
    """LibreClaw CLI - agent system prompt tooling.

    Build, inspect and preview the agent system prompt and its
    customizations (agents.defaults.systemPrompt in config.yml).

    Examples:

    \b
      libreclaw prompt build                         Print the configured prompt
      libreclaw prompt build --remove-section safety Drop a section
      libreclaw prompt sections                      List valid section ids
      libreclaw prompt serve --port 8787             Run the preview service
    """


def main():
    """Entry point for the libreclaw CLI."""
    try:
        cli()
    except KeyboardInterrupt:
        click.echo("\nGoodbye!", err=True)
        sys.exit(130)
    except Exception as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
