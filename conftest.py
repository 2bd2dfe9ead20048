import os

# Keep request logging deterministic in tests
os.environ.setdefault("LOG_SAMPLE_2XX", "1")
