"""Locating the docs tree to index."""

from pathlib import Path

from loguru import logger

from docnav.errors import DocsRootNotFoundError

COMMON_PARENTS = ("projects", "repos", "code")


def find_docs_root(
    configured: Path | None,
    *,
    folder_name: str = "docs",
    cwd: Path | None = None,
    home: Path | None = None,
) -> Path:
    """Find the docs root with clear precedence rules.

    Priority:
    1. Configured path (DOCS_PATH)
    2. Sibling of the working directory named folder_name
    3. folder_name below ~/projects, ~/repos, ~/code or ~

    Args:
        configured: Explicitly configured docs path, if any
        folder_name: Directory name to look for outside the configured path
        cwd: Working directory, defaults to the current one
        home: Home directory, defaults to the current user's

    Returns:
        Absolute path of the docs root

    Raises:
        DocsRootNotFoundError: If no candidate directory exists
    """
    cwd = cwd or Path.cwd()
    home = home or Path.home()

    candidates = []
    if configured is not None:
        candidates.append(configured)
    candidates.append(cwd.parent / folder_name)
    candidates.extend(home / parent / folder_name for parent in COMMON_PARENTS)
    candidates.append(home / folder_name)

    for candidate in candidates:
        logger.debug(f"Trying docs root: {candidate}")
        if candidate.is_dir():
            logger.info(f"Found docs at: {candidate.resolve()}")
            return candidate.resolve()

    raise DocsRootNotFoundError(
        f"Could not find a docs directory. Set DOCS_PATH or create a sibling '{folder_name}' "
        "directory."
    )
