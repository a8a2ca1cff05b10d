"""gitinfo: extract information about a git reference and export it."""

__version__ = "0.1.0"
