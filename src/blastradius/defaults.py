"""Single source of truth for shared constants and configuration defaults.

Every threshold, weight, or default that appears in more than one module
is defined here.  Regex tables that belong to a single extractor stay in that
module.
"""

from __future__ import annotations


# ---------------------------------------------------------------------------
# Source enumeration
# ---------------------------------------------------------------------------

SOURCE_EXTENSIONS: tuple[str, ...] = (".ts", ".tsx", ".js", ".jsx")
DECLARATION_SUFFIX = ".d.ts"
EXCLUDED_DIRS: frozenset[str] = frozenset({"node_modules", "dist", "build", "coverage", ".git"})

# Candidate suffixes tried when resolving a relative import, in order.
RESOLVE_SUFFIXES: tuple[str, ...] = (
    "", ".ts", ".tsx", ".js", ".jsx", "/index.ts", "/index.tsx", "/index.js",
)
PATH_ALIASES: tuple[str, ...] = ("@/", "~/")
ALIAS_TARGET = "./src/"

# ---------------------------------------------------------------------------
# Cache
# ---------------------------------------------------------------------------

CACHE_VERSION = "1.0.0"
DEFAULT_CACHE_DIR = ".cache/blastradius"
CACHE_FILE_NAME = "deptree.json"

# ---------------------------------------------------------------------------
# Traversal
# ---------------------------------------------------------------------------

DEFAULT_MAX_DEPTH = 10
MAX_DEPTH_RANGE = (1, 50)

# ---------------------------------------------------------------------------
# Risk
# ---------------------------------------------------------------------------

RISK_THRESHOLDS: dict[str, int] = {
    "low": 3,       # score <= 3
    "medium": 7,    # score <= 7, above is HIGH
}

RISK_WEIGHTS: dict[str, int] = {
    "high_risk_folder": 3,
    "medium_risk_folder": 1,
    "auth_security": 4,
    "database": 3,
    "config": 2,
    "shared_utility": 2,
    "core_file": 3,
    "multiple_modules": 2,
    "configured_high_risk": 3,
}
RISK_WEIGHT_RANGE = (0, 10)

MANY_FILES_THRESHOLD = 5
MANY_FILES_CAP = 3
MANY_UNIT_TESTS_THRESHOLD = 10
MANY_UNIT_TESTS_DIVISOR = 5
MANY_API_TESTS_THRESHOLD = 5
MANY_API_TESTS_DIVISOR = 2
TEST_IMPACT_CAP = 3
SUMMARY_TOP_SIGNALS = 3

# ---------------------------------------------------------------------------
# API tests
# ---------------------------------------------------------------------------

ROUTE_SIMILARITY_THRESHOLD = 0.6
BRUNO_CANDIDATE_DIRS: tuple[str, ...] = ("bruno", "api-tests", "api", "tests/bruno", "tests/api")

# ---------------------------------------------------------------------------
# Configuration files (searched in order)
# ---------------------------------------------------------------------------

CONFIG_FILE_NAMES: tuple[str, ...] = (
    ".blastradiusrc.json",
    ".blastradiusrc",
    "blastradius.config.json",
    "blastradius.config.yaml",
)
DEFAULT_CONFIG_FILE = ".blastradiusrc.json"

DEFAULT_IGNORE_PATTERNS: tuple[str, ...] = (
    "**/node_modules/**",
    "**/dist/**",
    "**/build/**",
    "**/coverage/**",
    "**/.git/**",
)
