"""gobeat: report game results to a configured server."""

__version__ = "0.1.0"
