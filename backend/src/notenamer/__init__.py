"""notenamer: AI-generated titles and tags for Markdown notes."""

__version__ = "0.1.0"
