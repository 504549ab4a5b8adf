"""Daily standup reports from local git history.

Package layout:
- git_standup.query: date window resolution and `git log` query construction
- git_standup.discovery: repository discovery under a starting directory
- git_standup.reporting: git invocation, terminal/report rendering, summaries
"""

__all__ = [
    "query",
    "discovery",
    "reporting",
]
