"""Command-line interface for tff.

- ``tff`` (console script) or ``python -m tff.cli`` -- list, export, inspect
  and edit FeedFactory resources; read account dictionaries.
"""
