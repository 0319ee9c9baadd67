"""giteasy - find beginner-friendly GitHub issues.

- Searches good-first-issue style issues, optionally ranked by issue
  recency combined with the popularity of the owning repository
- Classifies issues into categories, priority and difficulty from labels
  and titles
- Watches a set of repositories and refreshes their issues periodically
"""

__version__ = "1.0.0"
