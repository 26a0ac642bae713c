"""Command plumbing for autocommit.

``_base`` holds the Click command class; ``_context`` holds the per-run
AppContext.  The command itself lives in :mod:`autocommit.cli`.
"""
