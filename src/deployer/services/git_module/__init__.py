from .core import GitWorkspace

from .exceptions import WorkspaceGitError

__all__ = [
    "GitWorkspace",
    "WorkspaceGitError",
]
