"""OS-facing helpers: subprocess execution and filesystem operations."""
