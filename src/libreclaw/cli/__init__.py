"""Command-line interface for LibreClaw.

Commands:
    - prompt build: Build the agent system prompt with customizations
    - prompt sections: List valid section ids
    - prompt serve: Run the preview web service

Architecture:
    Uses Click for command-line parsing with a group-based structure.
    Commands are lazy-loaded for fast startup time.
"""

from .main import cli, main

__all__ = ['cli', 'main']
