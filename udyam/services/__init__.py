"""Service modules - registration backend and postal-code lookup."""
