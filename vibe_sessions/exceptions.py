"""Custom exceptions for vibe-sessions"""

from typing import Optional


class VibeSessionsError(Exception):
    """Base exception for all vibe-sessions errors."""
    pass


class GitOperationError(VibeSessionsError):
    """Exception raised for errors in Git operations."""

    def __init__(self, operation: str, session: Optional[str] = None, message: Optional[str] = None):
        self.operation = operation
        self.session = session
        self.message = message

        error_msg = f"Git operation '{operation}' failed"
        if session:
            error_msg += f" for session '{session}'"
        if message:
            error_msg += f": {message}"

        super().__init__(error_msg)


class NotInRepositoryError(GitOperationError):
    """Exception raised when the working directory is not inside a git repository."""

    def __init__(self, path: str):
        self.path = path
        super().__init__("open_repository", message=f"{path} is not inside a git repository")


class SessionNotFoundError(GitOperationError):
    """Exception raised when no session matches a requested name."""

    def __init__(self, name: str):
        super().__init__("find_session", name, "No matching session worktree")


class TerminalSessionError(VibeSessionsError):
    """Exception raised when the interactive selector fails to drive the terminal."""

    def __init__(self, message: str, return_code: Optional[int] = None):
        self.return_code = return_code
        error_msg = f"Interactive selector failed: {message}"
        if return_code is not None:
            error_msg += f" (exit {return_code})"
        super().__init__(error_msg)
