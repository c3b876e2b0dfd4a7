"""Core modules for cruftctl: paths, config, targets and theme."""
