"""Worktree operations service for vibe-sessions."""

import git
import os
from typing import Optional, Dict, Any, List, Tuple
from threading import Lock

from vibe_sessions.constants import IGNORED_UNTRACKED_PREFIX
from vibe_sessions.exceptions import GitOperationError, NotInRepositoryError
from vibe_sessions.logging_config import get_logger
from vibe_sessions.models.session import Session
from vibe_sessions.models.status import WorktreeStatus

logger = get_logger(__name__)

DEFAULT_MAIN_BRANCH = "main"
# Reported when there is nothing to compare HEAD against
UNKNOWN_COMMITS_AHEAD = 1


def parse_worktree_porcelain(output: str) -> List[Dict[str, Any]]:
    """Parse ``git worktree list --porcelain`` output.

    Format:
        worktree /path/to/worktree
        HEAD commit_sha
        branch refs/heads/branch-name
        (blank line between worktrees)

    Returns:
        One dict per worktree with "path", "HEAD" and "branch" keys
        ("branch" is empty for detached or bare entries)
    """
    entries: List[Dict[str, Any]] = []
    current: Dict[str, Any] = {}

    for line in output.split("\n"):
        line = line.strip()

        if not line:
            if current.get("path"):
                entries.append(current)
            current = {}
            continue

        if line.startswith("worktree "):
            current["path"] = line.split(" ", 1)[1]
            current.setdefault("branch", "")
            current.setdefault("HEAD", "")
        elif line.startswith("HEAD "):
            current["HEAD"] = line.split(" ", 1)[1]
        elif line.startswith("branch "):
            branch_ref = line.split(" ", 1)[1]
            if branch_ref.startswith("refs/heads/"):
                current["branch"] = branch_ref[len("refs/heads/"):]
        elif line in ("detached", "bare"):
            current["branch"] = ""

    # Last entry when there is no trailing blank line
    if current.get("path"):
        entries.append(current)

    return entries


def parse_status_porcelain(output: str) -> Tuple[int, int]:
    """Count changed and untracked files in ``git status --porcelain`` output.

    Staged and unstaged changes both count as modified. Untracked files under
    the session tooling directory are ignored.

    Returns:
        Tuple of (modified_files, untracked_files)
    """
    modified = 0
    untracked = 0

    for line in output.split("\n"):
        if len(line) < 3:
            continue

        if line.startswith("??"):
            path = line[3:].strip().strip('"')
            if not path.startswith(IGNORED_UNTRACKED_PREFIX):
                untracked += 1
            continue

        if line.startswith("!!"):
            continue
        modified += 1

    return modified, untracked


def parse_numstat(output: str) -> Tuple[int, int]:
    """Sum added and deleted lines from ``git diff --numstat`` output.

    Binary files report "-" and count as zero.

    Returns:
        Tuple of (lines_added, lines_deleted)
    """
    added = 0
    deleted = 0

    for line in output.split("\n"):
        parts = line.split("\t")
        if len(parts) < 3:
            continue
        if parts[0].isdigit():
            added += int(parts[0])
        if parts[1].isdigit():
            deleted += int(parts[1])

    return added, deleted


def _git_error_message(action: str, e: git.exc.GitCommandError) -> str:
    stderr = (e.stderr if hasattr(e, "stderr") and e.stderr else str(e)).strip()
    status = e.status if hasattr(e, "status") else "unknown"
    if stderr:
        return f"{action} failed (exit {status}): {stderr}"
    return f"{action} failed with exit code {status}"


class WorktreeService:
    """Service for enumerating, probing and removing session worktrees."""

    def __init__(self, repo_path: str, prefix: str = "claude/", main_branch: Optional[str] = None):
        """Initialize the worktree service.

        Args:
            repo_path: Path to the git repository (any of its worktrees works)
            prefix: Branch prefix that marks a worktree as a session
            main_branch: Main branch name, or None to detect it from origin/HEAD
        """
        self.repo_path = repo_path
        self.prefix = prefix
        self._main_branch = main_branch
        self._main_branch_lock = Lock()

    @staticmethod
    def find_repo_root(path: str) -> str:
        """Resolve the repository that ``path`` belongs to.

        Raises:
            NotInRepositoryError: If ``path`` is not inside a git repository
        """
        try:
            repo = git.Repo(path, search_parent_directories=True)
        except (git.exc.InvalidGitRepositoryError, git.exc.NoSuchPathError):
            raise NotInRepositoryError(path)
        try:
            return repo.working_tree_dir or repo.git_dir
        finally:
            repo.close()

    def _get_repo(self):
        """Get a fresh git.Repo instance.

        Creates a new repo instance for each call so worker threads never
        share one.
        """
        return git.Repo(self.repo_path)

    def get_main_branch(self) -> str:
        """Main branch name, detected once from origin/HEAD."""
        with self._main_branch_lock:
            if self._main_branch:
                return self._main_branch

            branch = DEFAULT_MAIN_BRANCH
            try:
                repo = self._get_repo()
                ref = repo.git.symbolic_ref("--quiet", "refs/remotes/origin/HEAD")
                if ref.startswith("refs/remotes/origin/"):
                    branch = ref[len("refs/remotes/origin/"):]
            except git.exc.GitCommandError as e:
                logger.debug(f"Could not resolve origin/HEAD, assuming '{branch}': {e}")

            self._main_branch = branch
            return branch

    def list_worktrees(self) -> List[Session]:
        """All worktrees of the repository, sessions or not."""
        try:
            output = self._get_repo().git.worktree("list", "--porcelain")
        except git.exc.GitCommandError as e:
            raise GitOperationError("list_worktrees", message=_git_error_message("git worktree list", e))

        worktrees = []
        for entry in parse_worktree_porcelain(output):
            path = entry["path"]
            worktrees.append(
                Session(
                    path=path,
                    branch_name=entry["branch"],
                    commit_sha=entry["HEAD"],
                    is_orphaned=not os.path.exists(path),
                    prefix=self.prefix,
                )
            )
        return worktrees

    def list_sessions(self) -> List[Session]:
        """Session worktrees (branch starts with the prefix) in `git worktree list` order."""
        sessions = [wt for wt in self.list_worktrees() if wt.branch_name.startswith(self.prefix)]
        logger.debug(f"Found {len(sessions)} session worktrees")
        for session in sessions:
            logger.debug(f"  {session}")
        return sessions

    def find_session(self, name: str) -> Optional[Session]:
        """First session whose path or branch contains ``name``."""
        for session in self.list_sessions():
            if session.matches(name):
                return session
        return None

    def get_worktree_status(self, worktree_path: str) -> WorktreeStatus:
        """Probe the state of one worktree.

        Args:
            worktree_path: Path to the worktree directory

        Returns:
            WorktreeStatus snapshot (orphaned if the directory is gone)

        Raises:
            GitOperationError: If git cannot inspect the worktree
        """
        if not os.path.exists(worktree_path):
            logger.debug(f"Worktree path {worktree_path} doesn't exist (orphaned)")
            return WorktreeStatus.orphaned()

        worktree_git = git.Git(worktree_path)
        try:
            modified, untracked = parse_status_porcelain(worktree_git.status("--porcelain"))
            lines_added, lines_deleted = parse_numstat(worktree_git.diff("HEAD", "--numstat"))
        except git.exc.GitCommandError as e:
            raise GitOperationError(
                "status", worktree_path, _git_error_message("git status in worktree", e)
            )

        commits_ahead = self._count_commits_ahead(worktree_git)

        return WorktreeStatus(
            is_orphaned=False,
            has_uncommitted=modified > 0 or untracked > 0,
            has_unpushed=commits_ahead > 0,
            modified_files=modified,
            untracked_files=untracked,
            lines_added=lines_added,
            lines_deleted=lines_deleted,
            commits_ahead=commits_ahead,
        )

    def _count_commits_ahead(self, worktree_git: git.Git) -> int:
        """Commits on HEAD that exist nowhere else.

        Compared against the upstream, then origin/<main>, then the local
        <main> branch. When none of them resolves the branch counts as one
        commit ahead, so it is never treated as safe to remove.
        """
        main_branch = self.get_main_branch()
        for base in ("@{upstream}", f"origin/{main_branch}", f"refs/heads/{main_branch}"):
            try:
                count = worktree_git.rev_list("--count", f"{base}..HEAD")
            except git.exc.GitCommandError:
                continue
            try:
                return int(count.strip())
            except ValueError:
                logger.debug(f"Unexpected rev-list output against {base}: {count!r}")
                return UNKNOWN_COMMITS_AHEAD
        logger.debug("No base to compare HEAD against, assuming unpushed commits")
        return UNKNOWN_COMMITS_AHEAD

    def get_change_digest(self, worktree_path: str, max_chars: int) -> str:
        """Uncommitted diff plus untracked file names, cut to ``max_chars``.

        Raises:
            GitOperationError: If git cannot read the worktree
        """
        worktree_git = git.Git(worktree_path)
        try:
            diff = worktree_git.diff("HEAD")
            untracked = worktree_git.ls_files("--others", "--exclude-standard")
        except git.exc.GitCommandError as e:
            raise GitOperationError("diff", worktree_path, _git_error_message("git diff", e))

        new_files = [
            f for f in untracked.split("\n") if f and not f.startswith(IGNORED_UNTRACKED_PREFIX)
        ]
        digest = diff
        if new_files:
            digest += "\n\nNew untracked files:\n" + "\n".join(new_files)
        return digest[:max_chars]

    def remove_session(self, session: Session, delete_branch: bool = True) -> Tuple[bool, Optional[str]]:
        """Remove a session worktree and optionally its branch.

        Orphaned sessions have no directory left, so their metadata is pruned
        instead of removed.

        Returns:
            Tuple of (success, error_message). error_message is None on success.
        """
        try:
            repo = self._get_repo()
            if os.path.exists(session.path):
                repo.git.worktree("remove", session.path, "--force")
                logger.info(f"Removed worktree at {session.path}")
            else:
                repo.git.worktree("prune")
                logger.info(f"Pruned orphaned worktree metadata for {session.path}")

            if delete_branch and session.branch_name:
                repo.git.branch("-D", session.branch_name)
                logger.info(f"Deleted branch {session.branch_name}")

            return True, None
        except git.exc.GitCommandError as e:
            error_msg = _git_error_message("git worktree remove", e)
            logger.error(f"Failed to remove session {session.name}: {error_msg}")
            return False, error_msg
        except Exception as e:
            error_msg = f"Unexpected error removing session: {e}"
            logger.error(error_msg)
            return False, error_msg
