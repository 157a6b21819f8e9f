"""Command-line interface for ReviewMate."""
