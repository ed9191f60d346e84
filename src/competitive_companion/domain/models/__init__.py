"""Domain models package."""

from .parsing import (
    ContestParseResult,
    ParseFailure,
    ParserChoices,
    ParserDescriptor,
    ParserKind,
)
from .task import Batch, Sendable, TaskBuilder, TestCase

__all__ = [
    "Batch",
    "ContestParseResult",
    "ParseFailure",
    "ParserChoices",
    "ParserDescriptor",
    "ParserKind",
    "Sendable",
    "TaskBuilder",
    "TestCase",
]
