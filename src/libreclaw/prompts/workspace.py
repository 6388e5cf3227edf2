"""Loading bootstrap files from an agent workspace.

The assembler only consumes already-resolved strings. This module is the
caller-side helper that turns a workspace directory into ContextFile
entries, and the place where a missing workspace is reported.
"""

from pathlib import Path

from libreclaw.utils.logger import get_logger

from .context import ContextFile
from .exceptions import RuntimeEnvironmentError

logger = get_logger("workspace")

# Injection order
BOOTSTRAP_FILE_NAMES: tuple[str, ...] = (
    "AGENTS.md",
    "SOUL.md",
    "TOOLS.md",
    "IDENTITY.md",
    "USER.md",
    "HEARTBEAT.md",
    "BOOTSTRAP.md",
    "MEMORY.md",
)

DEFAULT_BOOTSTRAP_MAX_CHARS = 20_000
BOOTSTRAP_HEAD_RATIO = 0.7
BOOTSTRAP_TAIL_RATIO = 0.2


def resolve_workspace_dir(workspace_dir: str | Path) -> Path:
    """Expand ``~`` and check the directory exists.

    Raises:
        RuntimeEnvironmentError: If the path is missing or not a directory
    """
    path = Path(workspace_dir).expanduser()
    if not path.exists():
        raise RuntimeEnvironmentError(f"Workspace directory does not exist: {path}", path=str(path))
    if not path.is_dir():
        raise RuntimeEnvironmentError(f"Workspace path is not a directory: {path}", path=str(path))
    return path


def truncate_bootstrap_content(content: str, file_name: str, max_chars: int) -> str:
    """Keep the head and tail of an oversized file with a marker line between them."""
    if max_chars <= 0 or len(content) <= max_chars:
        return content

    head_chars = int(max_chars * BOOTSTRAP_HEAD_RATIO)
    tail_chars = int(max_chars * BOOTSTRAP_TAIL_RATIO)
    head = content[:head_chars]
    tail = content[-tail_chars:] if tail_chars > 0 else ""
    marker = (
        f"[...truncated, read {file_name} for full content...]\n"
        f"…(truncated {file_name}: kept {head_chars}+{tail_chars} chars of {len(content)})…"
    )
    return "\n".join([head, marker, tail])


def load_workspace_context(
    workspace_dir: str | Path,
    file_names: tuple[str, ...] = BOOTSTRAP_FILE_NAMES,
    max_chars: int = DEFAULT_BOOTSTRAP_MAX_CHARS,
) -> tuple[ContextFile, ...]:
    """Read the bootstrap files that exist in ``workspace_dir``, in ``file_names`` order.

    Args:
        workspace_dir: Agent workspace; ``~`` is expanded
        file_names: Candidate file names relative to the workspace
        max_chars: Per-file character budget before truncation

    Returns:
        ContextFile entries with absolute paths

    Raises:
        RuntimeEnvironmentError: If the workspace is missing, or a present file cannot be read
    """
    root = resolve_workspace_dir(workspace_dir)
    files: list[ContextFile] = []

    for name in file_names:
        path = root / name
        if not path.is_file():
            continue
        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise RuntimeEnvironmentError(
                f"Cannot read workspace file {path}: {e}", path=str(path)
            ) from e

        if len(content) > max_chars > 0:
            logger.warning(f"{name} is {len(content)} chars (limit {max_chars}); truncating")
            content = truncate_bootstrap_content(content, name, max_chars)
        files.append(ContextFile(path=str(path), content=content))

    logger.debug(f"Loaded {len(files)} bootstrap file(s) from {root}")
    return tuple(files)
