"""HTTP API for nudex-catalog."""
