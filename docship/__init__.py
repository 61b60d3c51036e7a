"""docship - build and release automation for docfx."""

__version__ = "0.1.0"
