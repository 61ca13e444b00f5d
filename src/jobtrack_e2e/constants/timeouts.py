"""Default wait budgets in milliseconds."""

ELEMENT_TIMEOUT_MS = 5_000
URL_TIMEOUT_MS = 10_000
AUTH_REDIRECT_TIMEOUT_MS = 15_000
LOAD_PROBE_TIMEOUT_MS = 3_000
SETTLE_TIMEOUT_MS = 2_000
POLL_INTERVAL_MS = 100

# How long a list may take to start re-rendering after a filter change
RERENDER_TIMEOUT_MS = 1_000

# Reading a match that count() has just reported
READ_TIMEOUT_MS = 1_000

# Consecutive identical polls before a list is considered re-rendered
STABLE_POLLS = 3
