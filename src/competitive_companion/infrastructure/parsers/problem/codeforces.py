"""Parser for Codeforces problem pages."""

from typing import Optional

from bs4 import BeautifulSoup, Tag
from loguru import logger

from competitive_companion.domain.models import Sendable, TaskBuilder

from ..extraction import (
    NUMBER_PATTERN,
    element_text,
    parse_html,
    parse_memory_limit_mb,
    parse_time_limit_ms,
    require,
)
from ..interfaces import ProblemParser
from ..sample_tests import add_sample_tests, add_test


class CodeforcesProblemParser(ProblemParser):
    """Parser for extracting tasks from Codeforces problem pages."""

    name = "Codeforces"

    def get_match_patterns(self) -> list[str]:
        patterns = []
        for host in ("codeforces.com", "codeforces.ru"):
            patterns.extend(
                [
                    f"https://{host}/problemset/problem/*/*",
                    f"https://{host}/contest/*/problem/*",
                    f"https://{host}/gym/*/problem/*",
                ]
            )
        return patterns

    def parse(self, url: str, html: str) -> Sendable:
        logger.debug(f"Parsing Codeforces problem page: {url}")

        soup = parse_html(html)
        statement = require(soup, "div.problem-statement", "problem statement")
        header = require(statement, "div.header", "problem header")

        task = TaskBuilder("Codeforces").set_url(url)
        task.set_name(require(header, "div.title", "name").get_text())

        contest_name = self._extract_contest_name(soup)
        if contest_name:
            task.set_category(contest_name)

        task.set_interactive(self._is_interactive(statement))

        time_limit = self._limit_value(require(header, "div.time-limit", "time limit"))
        task.set_time_limit(parse_time_limit_ms(time_limit, NUMBER_PATTERN))

        memory_limit = self._limit_value(require(header, "div.memory-limit", "memory limit"))
        task.set_memory_limit(parse_memory_limit_mb(memory_limit, NUMBER_PATTERN))

        self._parse_tests(statement, soup, task)

        return task.build()

    def _parse_tests(self, statement: Tag, soup: BeautifulSoup, task: TaskBuilder) -> None:
        inputs = statement.select(".sample-test .input pre")
        outputs = statement.select(".sample-test .output pre")

        if not inputs or not outputs:
            add_sample_tests(task, soup)
            return

        for input_block, output_block in zip(inputs, outputs):
            add_test(task, self._block_text(input_block), self._block_text(output_block))

    def _block_text(self, pre: Tag) -> str:
        # Newer statements render each input line as its own div
        lines = pre.select("div.test-example-line")
        if lines:
            return "\n".join(line.get_text() for line in lines) + "\n"
        return element_text(pre)

    def _limit_value(self, element: Tag) -> str:
        # The value follows the localized .property-title label, always in
        # seconds and megabytes, e.g. "1 second" or "1 секунда"
        parts = [
            child.get_text() if isinstance(child, Tag) else str(child)
            for child in element.children
            if not (isinstance(child, Tag) and "property-title" in child.get("class", []))
        ]
        return "".join(parts).strip()

    def _is_interactive(self, statement: Tag) -> bool:
        if statement.select_one("div.interaction") is not None:
            return True
        return any(
            title.get_text(strip=True).lower() == "interaction"
            for title in statement.select("div.section-title")
        )

    def _extract_contest_name(self, soup: BeautifulSoup) -> Optional[str]:
        link = soup.select_one("#sidebar table.rtable th a")
        if link is None:
            return None
        return link.get_text(strip=True) or None
