"""Version information for vibe-sessions."""

try:
    from vibe_sessions._version import __version__
except ImportError:
    # Fallback for development without tags or when running from source
    __version__ = "0.0.0+unknown"
