"""Command line interface for gitexclude."""
