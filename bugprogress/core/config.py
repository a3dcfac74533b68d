"""
Configuration
=============
Loads environment variables from .env file using python-dotenv.

Environment Variables:
    BUGZILLA_BASE_URL    — Bugzilla instance root (default: https://bugzilla.mozilla.org/)
    BUGZILLA_API_KEY     — Optional API key, sent as X-BUGZILLA-API-KEY
    BUGZILLA_TIMEOUT     — Per-request timeout in seconds (default: 20)
    MAX_DEPTH            — Default dependency traversal depth (default: 5)
    MAX_DEPTH_LIMIT      — Largest depth accepted from API callers (default: 10)
    GRAPH_BUILD_TIMEOUT  — Max seconds for one full graph build (default: 120)
    LOG_DIR              — Directory for the daily log file (default: logs)

These values are only defaults. BugzillaClient and GraphBuilder take them as
constructor arguments so several builds against different instances can run
side by side.
"""
import os
from dotenv import load_dotenv

load_dotenv()

BUGZILLA_BASE_URL = os.getenv("BUGZILLA_BASE_URL", "https://bugzilla.mozilla.org/")
BUGZILLA_API_KEY = os.getenv("BUGZILLA_API_KEY")
BUGZILLA_TIMEOUT = float(os.getenv("BUGZILLA_TIMEOUT", 20.0))

# Traversal depth
MAX_DEPTH = int(os.getenv("MAX_DEPTH", 5))
MAX_DEPTH_LIMIT = int(os.getenv("MAX_DEPTH_LIMIT", 10))

# Hard ceiling for a single build, in seconds
GRAPH_BUILD_TIMEOUT = float(os.getenv("GRAPH_BUILD_TIMEOUT", 120))

LOG_DIR = os.getenv("LOG_DIR", "logs")
