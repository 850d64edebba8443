"""Allow running diskscope as ``python -m diskscope``."""

from diskscope.cli.main import app

if __name__ == "__main__":
    app()
