"""shortlink: a short-code issuing and redirection service."""

__version__ = "0.1.0"
