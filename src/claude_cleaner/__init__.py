"""claude-cleaner CLI entry point.

This package provides a Click-based CLI for removing Claude artifacts (marker
files, directories and commit-message trailers) from git repositories. See
`claude-cleaner --help` for details.
"""
