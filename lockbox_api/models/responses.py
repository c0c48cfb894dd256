"""
Response models for the Lockbox API.
"""

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Response model for the health check."""
    status: str = Field(..., description="Service status")
    message: str = Field(..., description="Human readable status message")
    upload_dir: str = Field(..., description="Directory stored files are kept in")
