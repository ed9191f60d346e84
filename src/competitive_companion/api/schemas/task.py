"""Pydantic schemas for parse API endpoints."""

from pydantic import BaseModel, ConfigDict


class ParseRequest(BaseModel):
    """Request to parse a page."""

    url: str
    html: str | None = None  # Fetched by the service when omitted
    parser: str | None = None  # Explicit parser name, skips disambiguation


class SampleTestResponse(BaseModel):
    input: str
    output: str

    model_config = ConfigDict(from_attributes=True)


class BatchResponse(BaseModel):
    id: str
    size: int

    model_config = ConfigDict(from_attributes=True)


class TaskResponse(BaseModel):
    """A normalized task."""

    url: str
    name: str
    group: str
    interactive: bool
    time_limit_ms: int
    memory_limit_mb: int
    tests: list[SampleTestResponse]
    batch: BatchResponse | None = None

    model_config = ConfigDict(from_attributes=True)


class FailureResponse(BaseModel):
    """A linked problem that could not be parsed."""

    url: str
    error: str
    field: str | None = None

    model_config = ConfigDict(from_attributes=True)


class ParseResponse(BaseModel):
    """Tasks extracted from a page."""

    parser: str
    tasks: list[TaskResponse]
    failures: list[FailureResponse] = []


class SendResponse(ParseResponse):
    """Tasks extracted from a page and handed to the receivers."""

    attempted: int  # Receiver delivery attempts summed over all tasks
