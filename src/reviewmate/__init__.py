"""ReviewMate - track GitHub pull requests and push live updates."""

__version__ = "0.1.0"
