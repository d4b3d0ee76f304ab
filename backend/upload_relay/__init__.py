"""
Upload Relay

Single-node file drop: accepts a PDF over HTTP, stores it on local disk
under a unique name and serves it back from /uploads.
"""

__version__ = "1.0.0"
