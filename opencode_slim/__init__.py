"""oh-my-opencode-slim installer."""

__version__ = "0.1.0"
