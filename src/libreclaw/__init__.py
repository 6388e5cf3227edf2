"""LibreClaw Prompt Engine.

Assembles the agent system prompt from a closed catalogue of named sections
and applies operator customizations on top of it.

This package contains:
- Section registry and section builders
- Document assembly and section filtering
- Customization composition (prepend/append, removal, guarded replace)
- Preview web service and CLI
- Configuration management
"""

# Version information
__version__ = "0.3.1"

__all__ = ["__version__"]

# Designed for on-demand imports; use specific imports like:
# from libreclaw.prompts import build_agent_system_prompt
