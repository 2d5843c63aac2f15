"""Allow running gato as `python -m gato`."""

from gato.cli import app

if __name__ == "__main__":
    app()
