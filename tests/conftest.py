"""Pytest fixtures for vibe-sessions tests"""
import tempfile
from pathlib import Path
from types import SimpleNamespace
import pytest
import git

from vibe_sessions.models.session import Session
from vibe_sessions.models.status import WorktreeStatus


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir).resolve()


@pytest.fixture
def mock_config():
    """Create a mock configuration dictionary."""
    return {
        'verbose': False,
        'debug': False,
        'worktree_prefix': 'claude/',
        'main_branch': None,
        'workers': 2,
        'summaries': False,
        'dry_run': False,
        'force': False,
        'poll_interval_ms': 10,
    }


@pytest.fixture
def git_repo(temp_dir):
    """Create a real Git repository for testing."""
    repo_path = temp_dir / "test_repo"
    repo_path.mkdir()

    # Initialize repository
    repo = git.Repo.init(repo_path)

    # Configure git user for commits
    repo.config_writer().set_value("user", "name", "Test User").release()
    repo.config_writer().set_value("user", "email", "test@example.com").release()

    # Create initial commit on main branch
    test_file = repo_path / "README.md"
    test_file.write_text("# Test Repository\n")
    repo.index.add(["README.md"])
    repo.index.commit("Initial commit")

    # Rename master to main if needed
    repo.git.branch('-M', 'main')

    # Local bare repository standing in for the remote
    origin_path = temp_dir / "origin.git"
    git.Repo.init(origin_path, bare=True).close()
    repo.create_remote('origin', str(origin_path))
    repo.git.push('origin', 'main')

    yield repo

    # Cleanup
    repo.close()


def _add_worktree(repo: git.Repo, path: Path, branch: str) -> Path:
    repo.git.worktree("add", "-b", branch, str(path), "main")
    return path


@pytest.fixture
def session_repo(git_repo, temp_dir):
    """Create a repository with one worktree per interesting session state.

    - claude/clean: nothing changed
    - claude/dirty: a modified file and an untracked file
    - claude/ahead: one commit not on origin/main
    - claude/tooling: only untracked files under .claude/
    - feature/other: not a session (wrong prefix)
    """
    repo = git_repo
    worktrees = temp_dir / "worktrees"
    worktrees.mkdir()

    clean = _add_worktree(repo, worktrees / "clean", "claude/clean")

    dirty = _add_worktree(repo, worktrees / "dirty", "claude/dirty")
    (dirty / "README.md").write_text("# Test Repository\nMore text\n")
    (dirty / "notes.txt").write_text("scratch\n")

    ahead = _add_worktree(repo, worktrees / "ahead", "claude/ahead")
    ahead_repo = git.Repo(ahead)
    (ahead / "feature.txt").write_text("feature\n")
    ahead_repo.index.add(["feature.txt"])
    ahead_repo.index.commit("Add feature")
    ahead_repo.close()

    tooling = _add_worktree(repo, worktrees / "tooling", "claude/tooling")
    (tooling / ".claude").mkdir()
    (tooling / ".claude" / "settings.json").write_text("{}\n")

    other = _add_worktree(repo, worktrees / "other", "feature/other")

    yield SimpleNamespace(
        repo=repo,
        path=Path(repo.working_dir),
        clean=clean,
        dirty=dirty,
        ahead=ahead,
        tooling=tooling,
        other=other,
    )



@pytest.fixture
def local_session_repo(temp_dir):
    """Create a repository with no remote at all.

    - claude/work: one commit that exists only on this branch
    - claude/idle: nothing committed beyond main
    """
    repo_path = temp_dir / "local_repo"
    repo_path.mkdir()
    repo = git.Repo.init(repo_path)
    repo.config_writer().set_value("user", "name", "Test User").release()
    repo.config_writer().set_value("user", "email", "test@example.com").release()
    (repo_path / "README.md").write_text("# Local only\n")
    repo.index.add(["README.md"])
    repo.index.commit("Initial commit")
    repo.git.branch('-M', 'main')

    worktrees = temp_dir / "local_worktrees"
    worktrees.mkdir()
    work = _add_worktree(repo, worktrees / "work", "claude/work")
    work_repo = git.Repo(work)
    (work / "result.txt").write_text("only copy\n")
    work_repo.index.add(["result.txt"])
    work_repo.index.commit("Keep me")
    work_repo.close()

    idle = _add_worktree(repo, worktrees / "idle", "claude/idle")

    yield SimpleNamespace(repo=repo, path=repo_path, work=work, idle=idle)

    repo.close()


@pytest.fixture
def sessions():
    """Four sessions that only exist on paper."""
    return [
        Session(path=f"/fake/worktrees/s{i}", branch_name=f"claude/s{i}", prefix="claude/")
        for i in range(4)
    ]


@pytest.fixture
def clean_status():
    return WorktreeStatus()


@pytest.fixture
def dirty_status():
    return WorktreeStatus(
        has_uncommitted=True,
        modified_files=2,
        untracked_files=1,
        lines_added=10,
        lines_deleted=3,
    )
