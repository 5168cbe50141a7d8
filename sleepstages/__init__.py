"""Sleep stage quiz tooling."""

__version__ = "0.1.0"
