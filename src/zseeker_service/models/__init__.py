"""
Pydantic data models for zseeker-service.

Provides type-safe models for scoring parameters, response payloads,
and service configuration.
"""

from zseeker_service.models.parameters import ParameterSet
from zseeker_service.models.responses import JobError, JobSuccess
from zseeker_service.models.config import ServiceConfig

__all__ = [
    "JobError",
    "JobSuccess",
    "ParameterSet",
    "ServiceConfig",
]
