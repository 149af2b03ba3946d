"""Settings for error reporting."""

from pydantic import BaseModel, Field


class ErrorReportingSettings(BaseModel):
    """Configuration for ErrorReporter."""

    history_size: int = Field(default=20, ge=0, le=500)
