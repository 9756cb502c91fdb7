"""
CLI commands for zseeker-service.

Provides the command-line interface for serving the HTTP API and for
running single ZSeeker jobs locally.
"""

__all__ = ["main", "run", "serve"]
