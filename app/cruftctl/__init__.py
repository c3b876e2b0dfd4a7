"""cruftctl - find disposable build artifacts in a directory tree."""

__version__ = "0.1.0"
