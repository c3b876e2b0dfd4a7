"""Allow running cruftctl as ``python -m cruftctl``."""

from cruftctl.cli.main import app

if __name__ == "__main__":
    app()
