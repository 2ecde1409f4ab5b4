"""Dependency injection for FastAPI endpoints"""

import uuid
from datetime import date
from typing import Optional
from fastapi import Header, HTTPException, Query, Request


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_current_user_id(
    x_user_id: str = Header(..., min_length=1, description="Owner of the expenses and budgets"),
) -> str:
    """Identify the calling user; authentication happens upstream of this service"""
    return x_user_id


def get_as_of(
    as_of: Optional[date] = Query(None, description="Evaluation date (defaults to today)"),
) -> date:
    """Reference date for 'active now' filtering, read once at the edge"""
    return as_of or date.today()


def parse_resource_id(raw_id: str, resource: str) -> uuid.UUID:
    """Parse a path ID, rejecting malformed values with 400"""
    try:
        return uuid.UUID(raw_id)
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Invalid {resource} ID format")
