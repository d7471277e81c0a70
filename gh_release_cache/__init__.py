"""In-memory cache of GitHub releases and passing pull request builds."""

__version__ = "0.1.0"
