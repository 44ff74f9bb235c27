"""Core engine: pattern compiler, matcher, exclude groups and the ignorer."""
