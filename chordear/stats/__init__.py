from .stats import SessionStats, format_summary  # noqa: F401
