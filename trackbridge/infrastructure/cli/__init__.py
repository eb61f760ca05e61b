"""Command-line interface for Trackbridge."""
