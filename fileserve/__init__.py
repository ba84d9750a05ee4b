"""A small TCP server for remote file management under a root directory."""

__version__ = "0.1.0"
__all__ = ["cli", "filesystem", "server", "textutil"]