"""
HTTP interface for zseeker-service.
"""

from zseeker_service.api.app import create_app

__all__ = ["create_app"]
