"""Command-line interface for nudex-catalog."""
