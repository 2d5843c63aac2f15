"""AI commit message generator backed by a local qwen CLI."""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("gato")
except PackageNotFoundError:
    # Fallback for development mode
    __version__ = "0.0.0-dev"
