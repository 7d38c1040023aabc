"""Dead and redirected link detection for Markdown and plain-text documents."""

__version__ = "0.1.0"
