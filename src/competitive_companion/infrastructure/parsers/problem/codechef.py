"""Parser for CodeChef problem pages."""

from loguru import logger

from competitive_companion.domain.models import Sendable, TaskBuilder

from ..extraction import parse_html, parse_time_limit_ms, require, require_all
from ..interfaces import ProblemParser
from ..sample_tests import add_sample_tests


class CodeChefProblemParser(ProblemParser):
    """Parser for extracting tasks from CodeChef problem pages."""

    name = "CodeChef"

    MEMORY_LIMIT_MB = 256
    INTERACTIVE_MARKER = "This is an interactive problem"

    def get_match_patterns(self) -> list[str]:
        return [
            "https://www.codechef.com/problems/*",
            "https://www.codechef.com/*/problems/*",
        ]

    def get_excluded_match_patterns(self) -> list[str]:
        # Practice listings share the /problems/<name> shape
        return [
            "https://www.codechef.com/problems/school",
            "https://www.codechef.com/problems/easy",
            "https://www.codechef.com/problems/medium",
            "https://www.codechef.com/problems/hard",
            "https://www.codechef.com/problems/challenge",
            "https://www.codechef.com/problems/extcontest",
        ]

    def parse(self, url: str, html: str) -> Sendable:
        logger.debug(f"Parsing CodeChef problem page: {url}")

        soup = parse_html(html)
        task = TaskBuilder("CodeChef").set_url(url)

        heading = require_all(soup, "h1", "name")[-1]
        task.set_name(heading.get_text().strip().split("\n")[0])

        breadcrumbs = soup.select(".breadcrumbs a")
        if breadcrumbs:
            task.set_category(breadcrumbs[-1].get_text())

        task.set_interactive(self.INTERACTIVE_MARKER in html)

        add_sample_tests(task, soup)

        problem_info = require(soup, ".problem-info", "time limit")
        task.set_time_limit(parse_time_limit_ms(problem_info.get_text()))
        task.set_memory_limit(self.MEMORY_LIMIT_MB)

        return task.build()
