"""Allow ``python -m ottl_playground``."""

from ottl_playground.cli.app import app

if __name__ == "__main__":
    app()
