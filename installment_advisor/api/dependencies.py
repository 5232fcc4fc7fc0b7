"""Dependency injection for FastAPI endpoints"""

from fastapi import Request
from installment_advisor.infrastructure.clients.rates import ReferenceRateClient


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_rate_client() -> ReferenceRateClient:
    """Provide reference rate client instance"""
    return ReferenceRateClient()
