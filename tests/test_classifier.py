"""Tests for label/title driven classification."""

import pytest

from giteasy.classifier import (
    CATEGORY_RULES,
    categorize,
    classify,
    classify_issue,
    difficulty,
    priority,
    repository_badges,
)
from giteasy.config import ISSUE_CATEGORIES
from giteasy.models import Classification


class TestCategorize:
    def test_beginner_label_beats_bug(self, make_issue):
        issue = make_issue("Fix crash on startup", labels=("good first issue", "bug"))
        assert categorize(issue) == "good-first-issue"

    @pytest.mark.parametrize(
        "labels, expected",
        [
            (("good-first-issue",), "good-first-issue"),
            (("Documentation",), "documentation"),
            (("type: docs",), "documentation"),
            (("beginner",), "beginner-friendly"),
            (("easy",), "beginner-friendly"),
            (("starter",), "beginner-friendly"),
            (("help wanted",), "help-wanted"),
            (("up-for-grabs",), "help-wanted"),
        ],
    )
    def test_beginner_buckets(self, make_issue, labels, expected):
        assert categorize(make_issue("Anything", labels=labels)) == expected

    def test_beginner_bucket_order(self, make_issue):
        issue = make_issue("x", labels=("help wanted", "documentation"))
        assert categorize(issue) == "documentation"

    def test_label_evidence_beats_title(self, make_issue):
        issue = make_issue("Add caching layer", labels=("performance",))
        assert categorize(issue) == "performance"

    def test_performance_scenario(self, make_issue):
        issue = make_issue("Optimize rendering loop", labels=("performance",))
        assert categorize(issue) == "performance"
        assert difficulty(issue) == "advanced"

    @pytest.mark.parametrize(
        "title, expected",
        [
            ("Add dark mode toggle", "feature"),
            ("Implement retry policy", "feature"),
            ("Optimize startup", "performance"),
            ("Broken UI on mobile", "ui-ux"),
            ("Missing test for parser", "testing"),
            ("Refactor config loader", "refactoring"),
            ("Improve accessibility of forms", "accessibility"),
            ("API returns 500", "api"),
            ("Database migration hangs", "database"),
            ("Deploy script broken", "deployment"),
            ("Error when saving file", "bug"),
            ("Feature parity with v1", "enhancement"),
            ("Something odd", "other"),
        ],
    )
    def test_title_heuristics(self, make_issue, title, expected):
        assert categorize(make_issue(title)) == expected

    @pytest.mark.parametrize(
        "title, labels, expected",
        [
            ("x", ("bugfix",), "bug"),
            ("x", ("bugs",), "bug"),
            ("Fix bugs in parser", (), "bug"),
            ("x", ("mongodb",), "database"),
            ("x", ("gui",), "ui-ux"),
            ("x", ("area/ui",), "ui-ux"),
            ("x", ("ci/cd",), "deployment"),
            ("Document the public apis", (), "api"),
        ],
    )
    def test_terms_match_as_substrings(self, make_issue, title, labels, expected):
        assert categorize(make_issue(title, labels=labels)) == expected

    def test_label_rules(self, make_issue):
        assert categorize(make_issue("x", labels=("security",))) == "security"
        assert categorize(make_issue("x", labels=("bug",))) == "bug"
        assert categorize(make_issue("x", labels=("enhancement",))) == "enhancement"
        assert categorize(make_issue("x", labels=("spelling",))) == "typo"

    def test_every_rule_category_is_known(self):
        assert {c for c, _ in CATEGORY_RULES} <= set(ISSUE_CATEGORIES)

    def test_no_labels_no_title(self, make_issue):
        assert categorize(make_issue("")) == "other"


class TestPriority:
    def test_beginner_labels_force_low(self, make_issue):
        assert priority(make_issue("x", labels=("good first issue", "critical"))) == "low"

    def test_high(self, make_issue):
        assert priority(make_issue("x", labels=("priority: urgent",))) == "high"
        assert priority(make_issue("x", labels=("P-high",))) == "high"

    def test_medium(self, make_issue):
        assert priority(make_issue("x", labels=("important",))) == "medium"

    def test_default_low(self, make_issue):
        assert priority(make_issue("x", labels=("bug",))) == "low"


class TestDifficulty:
    def test_beginner(self, make_issue):
        assert difficulty(make_issue("Refactor", labels=("typo",))) == "beginner"
        assert difficulty(make_issue("x", labels=("documentation",))) == "beginner"

    def test_advanced_from_title(self, make_issue):
        assert difficulty(make_issue("Refactor the scheduler")) == "advanced"

    def test_advanced_from_label(self, make_issue):
        assert difficulty(make_issue("x", labels=("architecture",))) == "advanced"

    def test_default(self, make_issue):
        assert difficulty(make_issue("Crash on exit", labels=("bug",))) == "intermediate"


class TestClassify:
    def test_scenario(self, make_issue):
        issue = make_issue("Fix crash on startup", labels=("good first issue", "bug"))
        assert classify(issue) == Classification("good-first-issue", "low", "beginner")

    def test_pure(self, make_issue):
        issue = make_issue("Optimize API calls", labels=("performance", "high"))
        assert classify(issue) == classify(issue)
        assert classify_issue(issue) == classify_issue(issue)

    def test_classify_issue_carries_repository(self, make_issue):
        issue = make_issue("x", labels=("bug",), repo="acme/rockets")
        assert classify_issue(issue).repository == "acme/rockets"
        assert classify_issue(issue, "other/name").repository == "other/name"


class TestBadges:
    def test_topics_to_badges(self, make_repo):
        repo = make_repo(topics=("hacktoberfest", "python", "good-first-issue"))
        assert repository_badges(repo) == ["Good First Issue", "Hacktoberfest"]

    def test_no_topics(self, make_repo):
        assert repository_badges(make_repo()) == []
