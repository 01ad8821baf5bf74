"""
Central configuration for ignore file processing
"""

# Single source of truth for ignore filename
IGNORE_FILENAME = ".gitignore"

# Directory names never descended into or reported
SKIP_DIRECTORY_NAMES = frozenset({".git"})

# Decision cache entries kept by IgnoreManager (0 disables caching)
DEFAULT_CACHE_SIZE = 10000

# Logging environment variables (GIT_IGNORE_* takes precedence over LOG_LEVEL)
LOG_LEVEL_ENV = "GIT_IGNORE_LOG_LEVEL"
FALLBACK_LOG_LEVEL_ENV = "LOG_LEVEL"
LOG_FORMAT_ENV = "GIT_IGNORE_LOG_FORMAT"
DEFAULT_LOG_LEVEL = "WARNING"
