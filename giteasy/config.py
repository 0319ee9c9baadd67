"""Configuration constants for giteasy."""

from pathlib import Path

API = "https://api.github.com"
ACCEPT = "application/vnd.github.v3+json"

DATA_DIR = Path.home() / ".giteasy"
TOKEN_PATH = DATA_DIR / "token"
WATCHLIST_PATH = DATA_DIR / "watchlist.json"

# ── Query construction ───────────────────────────────────────
DEFAULT_LABEL = "good first issue"
BEGINNER_TOPICS = ("good-first-issue", "beginner-friendly", "hacktoberfest")
MIN_COMMENTS = 1
MAX_COMMENTS = 10
MAX_COMMENTS_TWO_STAGE = 15  # popular repos get busier threads
DISCOVERY_MIN_STARS = 100
CANDIDATE_MIN_STARS = 500
MAX_QUERY_LENGTH = 1000
MAX_REPO_FILTER = 10

# ── Retrieval limits ─────────────────────────────────────────
REPO_SEARCH_CAP = 50
ISSUE_SEARCH_CAP = 100
ISSUE_RESULTS_LIMIT = 50
BEGINNER_REPO_RESULTS = 30
CANDIDATE_REPO_RESULTS = 20
TWO_STAGE_ISSUE_RESULTS = 50
LIST_PER_PAGE = 100
REQUEST_TIMEOUT_S = 20

REPO_SORTS = ("stars", "updated", "forks")
ISSUE_SORTS = ("updated", "stars", "created")

# ── Scoring ──────────────────────────────────────────────────
RECENCY_WEIGHT = 0.6
POPULARITY_WEIGHT = 0.4
RECENCY_HORIZON_DAYS = 100

# ── Aggregation ──────────────────────────────────────────────
BATCH_SIZE = 3
ISSUES_PER_REPOSITORY = 20
REFRESH_INTERVAL_S = 2 * 60
NOTIFICATION_LIMIT = 10

# ── Classification ───────────────────────────────────────────
# Any label containing one of these counts as a beginner signal.
BEGINNER_LABELS = (
    "good first issue", "good-first-issue", "beginner", "beginner-friendly",
    "easy", "starter", "newcomer", "first-timers-only", "up-for-grabs",
    "help wanted", "documentation", "docs", "typo", "enhancement",
    "feature", "hacktoberfest", "low-hanging-fruit", "easy-fix",
    "junior-job",
)

BEGINNER_CATEGORIES = ("good-first-issue", "beginner-friendly", "documentation")

ISSUE_CATEGORIES = (
    "good-first-issue", "documentation", "beginner-friendly", "help-wanted",
    "feature", "performance", "ui-ux", "testing", "refactoring",
    "accessibility", "api", "database", "deployment", "security", "bug",
    "enhancement", "typo", "other",
)

DEFAULT_ISSUE_TYPES = BEGINNER_CATEGORIES + ("help-wanted",)

POPULAR_LANGUAGES = (
    "JavaScript", "TypeScript", "Python", "Java", "Go", "Rust",
    "C++", "C#", "PHP", "Ruby",
)

# ── Curated beginner-friendly repositories ───────────────────
BEGINNER_REPOS = [
    "freeCodeCamp/freeCodeCamp", "microsoft/vscode", "facebook/react",
    "vuejs/vue", "angular/angular", "nodejs/node",
    "tensorflow/tensorflow", "kubernetes/kubernetes",
    "elastic/elasticsearch", "atom/atom", "rails/rails", "django/django",
    "laravel/laravel", "symfony/symfony", "spring-projects/spring-boot",
    "apache/kafka", "mozilla/pdf.js", "gatsbyjs/gatsby", "nuxt/nuxt.js",
    "nestjs/nest", "expressjs/express", "socketio/socket.io",
    "lodash/lodash", "moment/moment", "chartjs/Chart.js",
    "prettier/prettier", "eslint/eslint", "webpack/webpack",
    "babel/babel", "storybookjs/storybook", "jestjs/jest",
    "cypress-io/cypress", "puppeteer/puppeteer", "microsoft/TypeScript",
    "golang/go", "rust-lang/rust", "python/cpython", "openjdk/jdk",
    "dotnet/core", "flutter/flutter", "ionic-team/ionic-framework",
    "apache/spark", "pandas-dev/pandas", "numpy/numpy",
    "scikit-learn/scikit-learn", "jupyter/notebook", "home-assistant/core",
    "ansible/ansible", "docker/docker-ce", "grafana/grafana",
    "prometheus/prometheus", "hashicorp/terraform",
]
CURATED_LIMIT = 20
