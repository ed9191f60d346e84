"""Parser for Universal Online Judge (uoj.ac) problem pages."""

import re

from bs4 import BeautifulSoup
from loguru import logger

from competitive_companion.domain.exceptions import ExtractionError
from competitive_companion.domain.models import Sendable, TaskBuilder

from ..extraction import parse_html, parse_memory_limit_mb, parse_time_limit_ms, require
from ..interfaces import ProblemParser
from ..sample_tests import SAMPLE_TEST_STRATEGIES, SamplePair, add_sample_tests

TIME_LIMIT_PATTERN = re.compile(
    r"(?:时间限制|time limit)\s*[:：]?\s*([0-9]+(?:\.[0-9]+)?)\s*(ms|s)(?![a-z])", re.I
)
MEMORY_LIMIT_PATTERN = re.compile(
    r"(?:空间限制|内存限制|memory limit)\s*[:：]?\s*([0-9]+(?:\.[0-9]+)?\s*[kmg]i?b)", re.I
)


def uoj_sample_headings(soup: BeautifulSoup) -> list[SamplePair]:
    """input/output (输入/输出) headings followed by a <pre> block."""
    inputs = []
    outputs = []

    for heading in soup.select(".uoj-content h3, .uoj-content h4"):
        following = heading.find_next_sibling()
        if following is None or following.name != "pre":
            continue

        text = heading.get_text(strip=True).lower()
        if "input" in text or "输入" in text:
            inputs.append(following.get_text())
        elif "output" in text or "输出" in text:
            outputs.append(following.get_text())

    return list(zip(inputs, outputs))


class UOJProblemParser(ProblemParser):
    """Parser for extracting tasks from UOJ problem pages."""

    name = "UOJ"

    def get_match_patterns(self) -> list[str]:
        return [
            "https://uoj.ac/problem/*",
            "https://uoj.ac/contest/*/problem/*",
        ]

    def parse(self, url: str, html: str) -> Sendable:
        logger.debug(f"Parsing UOJ problem page: {url}")

        soup = parse_html(html)
        content = require(soup, ".uoj-content", "problem content")

        task = TaskBuilder("UOJ").set_url(url)
        task.set_name(require(content, ".page-header", "name").get_text())

        contest_title = content.select_one(".text-center > h1")
        if contest_title is not None:
            task.set_category(contest_title.get_text())
        else:
            task.set_group("UOJ")

        text = content.get_text(" ")

        task.set_time_limit(parse_time_limit_ms(text, TIME_LIMIT_PATTERN))

        memory_match = MEMORY_LIMIT_PATTERN.search(text)
        if memory_match is None:
            raise ExtractionError("memory limit", "no memory limit label found")
        task.set_memory_limit(parse_memory_limit_mb(memory_match.group(1)))

        add_sample_tests(task, soup, (uoj_sample_headings, *SAMPLE_TEST_STRATEGIES))

        return task.build()
