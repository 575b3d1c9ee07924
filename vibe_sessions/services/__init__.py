"""Services for vibe-sessions."""
