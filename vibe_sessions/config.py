"""Configuration handling for vibe-sessions"""

from dataclasses import dataclass, field
from typing import Optional, List

DEFAULT_SUMMARY_PROMPT = (
    "Summarize the intent of these uncommitted changes in one short line "
    "(at most 10 words). Reply with the summary only."
)


@dataclass
class Config:
    """Configuration for vibe-sessions with validation."""

    # Session discovery
    worktree_prefix: str = "claude/"
    main_branch: Optional[str] = None  # None = detect from origin/HEAD

    # Background probes
    workers: Optional[int] = None  # Status probe workers (None = auto-detect)
    summary_workers: int = 2
    summaries: bool = True
    summary_command: List[str] = field(default_factory=lambda: ["claude", "-p", DEFAULT_SUMMARY_PROMPT])
    summary_timeout: float = 60.0
    summary_max_chars: int = 20000  # Diff text handed to the summary command

    # Selector
    poll_interval_ms: int = 50
    max_visible_items: int = 6
    inline: bool = True

    # Execution modes
    dry_run: bool = False
    force: bool = False
    verbose: bool = False
    debug: bool = False

    def __post_init__(self):
        """Validate configuration after initialization."""
        self._validate_worktree_prefix()
        self._validate_main_branch()
        self._validate_workers()
        self._validate_summary_command()
        self._validate_summary_limits()
        self._validate_poll_interval()
        self._validate_max_visible_items()

    def _validate_worktree_prefix(self):
        """Validate worktree_prefix is not empty."""
        if not self.worktree_prefix or not self.worktree_prefix.strip():
            raise ValueError("worktree_prefix cannot be empty")
        self.worktree_prefix = self.worktree_prefix.strip()

    def _validate_main_branch(self):
        """Normalize main_branch, treating blank as auto-detect."""
        if self.main_branch is not None:
            self.main_branch = self.main_branch.strip() or None

    def _validate_workers(self):
        """Validate worker counts are positive."""
        if self.workers is not None and self.workers <= 0:
            raise ValueError(f"workers must be positive, got {self.workers}")
        if self.summary_workers <= 0:
            raise ValueError(f"summary_workers must be positive, got {self.summary_workers}")

    def _validate_summary_command(self):
        """Validate summary_command is a non-empty argument list."""
        if not isinstance(self.summary_command, list):
            raise ValueError("summary_command must be a list")
        if self.summaries and not self.summary_command:
            raise ValueError("summary_command cannot be empty when summaries are enabled")

    def _validate_summary_limits(self):
        """Validate summary timeout and size limits."""
        if self.summary_timeout <= 0:
            raise ValueError(f"summary_timeout must be positive, got {self.summary_timeout}")
        if self.summary_max_chars <= 0:
            raise ValueError(f"summary_max_chars must be positive, got {self.summary_max_chars}")

    def _validate_poll_interval(self):
        """Validate poll_interval_ms stays in the responsive range."""
        if not 10 <= self.poll_interval_ms <= 1000:
            raise ValueError(
                f"poll_interval_ms must be between 10 and 1000, got {self.poll_interval_ms}"
            )

    def _validate_max_visible_items(self):
        """Validate max_visible_items is positive."""
        if self.max_visible_items <= 0:
            raise ValueError(f"max_visible_items must be positive, got {self.max_visible_items}")

    @property
    def poll_interval(self) -> float:
        """Selector tick interval in seconds."""
        return self.poll_interval_ms / 1000

    def to_dict(self) -> dict:
        """Convert config to dictionary."""
        return {
            "worktree_prefix": self.worktree_prefix,
            "main_branch": self.main_branch,
            "workers": self.workers,
            "summary_workers": self.summary_workers,
            "summaries": self.summaries,
            "summary_command": self.summary_command,
            "summary_timeout": self.summary_timeout,
            "summary_max_chars": self.summary_max_chars,
            "poll_interval_ms": self.poll_interval_ms,
            "max_visible_items": self.max_visible_items,
            "inline": self.inline,
            "dry_run": self.dry_run,
            "force": self.force,
            "verbose": self.verbose,
            "debug": self.debug,
        }

    def get(self, key: str, default=None):
        """Get config value by key."""
        return getattr(self, key, default)

    @classmethod
    def from_dict(cls, config_dict: dict) -> "Config":
        """Create Config from dictionary, ignoring unknown keys."""
        known_fields = set(cls.__dataclass_fields__)
        filtered = {k: v for k, v in config_dict.items() if k in known_fields}
        return cls(**filtered)
