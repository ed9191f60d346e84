"""Pydantic schemas for parser listing endpoints."""

from pydantic import BaseModel, ConfigDict


class ParserChoicesResponse(BaseModel):
    """Parser names grouped by kind."""

    problem: list[str]
    contest: list[str]

    model_config = ConfigDict(from_attributes=True)
