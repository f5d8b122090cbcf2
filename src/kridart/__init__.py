"""KridArt Stage backend: accounts, project documents and live chat."""

__version__ = "1.0.0"
