"""tff -- command-line client for the FeedFactory API."""

__version__ = "0.1.0"
