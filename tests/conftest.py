"""Shared fixtures: judge pages and fake collaborators."""

import pytest

from competitive_companion.domain.exceptions import FetchError

CODECHEF_PROBLEM_HTML = """
<html><body>
<div class="breadcrumbs"><a href="/">Home</a> » <a href="/practice">Practice</a></div>
<h1>CodeChef</h1>
<h1>Chef and Sums
Problem Code: CHEFSUM</h1>
<div class="problem-info">Time Limit: 1.5 secs</div>
<div class="problem-statement">
<p>Print the sum of every pair.</p>
<pre><b>Input:</b>
2
1 2
<b>Output:</b>
3
</pre>
</div>
</body></html>
"""

CODECHEF_INTERACTIVE_HTML = """
<html><body>
<h1>Guess the Number</h1>
<div class="problem-info">Time Limit: 2 secs</div>
<p>This is an interactive problem.</p>
</body></html>
"""

CODEFORCES_PROBLEM_HTML = """
<html><body>
<div id="sidebar">
<table class="rtable"><tr><th class="left"><a href="/contest/4">Codeforces Beta Round 4 (Div. 2 Only)</a></th></tr></table>
</div>
<div class="problem-statement">
<div class="header">
<div class="title">A. Watermelon</div>
<div class="time-limit"><div class="property-title">time limit per test</div>1 second</div>
<div class="memory-limit"><div class="property-title">memory limit per test</div>64 megabytes</div>
</div>
<div><p>One hot summer day Pete and his friend Billy decided to buy a watermelon.</p></div>
<div class="sample-tests">
<div class="section-title">Examples</div>
<div class="sample-test">
<div class="input"><div class="title">Input</div><pre>8
</pre></div>
<div class="output"><div class="title">Output</div><pre>YES
</pre></div>
<div class="input"><div class="title">Input</div><pre>5<br/>7</pre></div>
<div class="output"><div class="title">Output</div><pre>NO</pre></div>
</div>
</div>
</div>
</body></html>
"""

CODEFORCES_INTERACTIVE_HTML = """
<html><body>
<div class="problem-statement">
<div class="header">
<div class="title">B. Guess</div>
<div class="time-limit"><div class="property-title">time limit per test</div>2.5 seconds</div>
<div class="memory-limit"><div class="property-title">memory limit per test</div>256 megabytes</div>
</div>
<div class="interaction"><div class="section-title">Interaction</div><p>Ask queries.</p></div>
</div>
</body></html>
"""

UOJ_PROBLEM_HTML = """
<html><body>
<div class="uoj-content">
<h1 class="page-header text-center">#1. A + B Problem</h1>
<div class="row text-center">
<span class="label label-info">时间限制：1 s</span>
<span class="label label-info">空间限制：256 MB</span>
</div>
<article class="uoj-article top-buffer-md">
<h3>输入格式</h3>
<p>Two integers.</p>
<h3>样例一</h3>
<h4>input</h4>
<pre>1 2</pre>
<h4>output</h4>
<pre>3</pre>
<h3>样例二</h3>
<h4>input</h4>
<pre>5 6</pre>
<h4>output</h4>
<pre>11</pre>
</article>
</div>
</body></html>
"""

CODEFORCES_CONTEST_HTML = """
<html><body>
<table class="problems">
<tr><th>#</th><th>Name</th></tr>
<tr><td class="id"><a href="/contest/1/problem/A">A</a></td><td>First</td></tr>
<tr><td class="id"><a href="/contest/1/problem/B">B</a></td><td>Second</td></tr>
<tr><td class="id"><a href="/contest/1/problem/C">C</a></td><td>Third</td></tr>
</table>
</body></html>
"""


class FakeHTTPClient:
    """HTTP client serving pages from a dict; unknown URLs are 404."""

    def __init__(self, pages: dict[str, str] | None = None):
        self.pages = dict(pages or {})
        self.requested: list[str] = []

    async def get_text(self, url: str) -> str:
        self.requested.append(url)
        if url not in self.pages:
            raise FetchError(url, "HTTP 404", 404)
        return self.pages[url]


@pytest.fixture
def http_client() -> FakeHTTPClient:
    return FakeHTTPClient()
