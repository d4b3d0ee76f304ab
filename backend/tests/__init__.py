"""
Tests package for the upload relay backend.

This package contains test suites organized by type:
- unit/: Domain, configuration and CLI tests with no real storage
- integration/: Tests against the real filesystem and the full Flask app
- property/: Hypothesis property tests for upload naming
"""
