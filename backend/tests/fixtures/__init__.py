"""
Test fixtures and helpers for the upload relay test suite.
"""
