"""Parsers for extracting tasks from judge pages."""

from .contest import ContestParser
from .interfaces import HTTPClientProtocol, Parser, ProblemParser
from .matching import compile_pattern, is_eligible, matches_any
from .problem import CodeChefProblemParser, CodeforcesProblemParser, UOJProblemParser
from .registry import ParserRegistry, create_registry
from .sample_tests import SAMPLE_TEST_STRATEGIES, add_sample_tests, extract_sample_tests

__all__ = [
    "CodeChefProblemParser",
    "CodeforcesProblemParser",
    "ContestParser",
    "HTTPClientProtocol",
    "Parser",
    "ParserRegistry",
    "ProblemParser",
    "SAMPLE_TEST_STRATEGIES",
    "UOJProblemParser",
    "add_sample_tests",
    "compile_pattern",
    "create_registry",
    "extract_sample_tests",
    "is_eligible",
    "matches_any",
]
