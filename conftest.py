import os

# Default to the in-process backend for tests
os.environ.setdefault("STORAGE_BACKEND", "memory")
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ.setdefault("REQUEST_TIMEOUT_SECS", "5")
