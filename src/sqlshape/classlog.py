"""Classification log — daily JSONL files per project, with automatic retention cleanup."""

from __future__ import annotations

import contextlib
import json
import os
from datetime import UTC, datetime, timedelta
from pathlib import Path

DEFAULT_RETENTION_DAYS = 30
_LOG_ROOT = Path.home() / ".sqlshape" / "logs"


def _project_slug() -> str:
    """Encode cwd into a directory-safe slug."""
    cwd = os.getcwd()
    return cwd.replace("/", "-").lstrip("-")


def _log_dir() -> Path:
    return _LOG_ROOT / _project_slug()


def _today_file() -> Path:
    today = datetime.now(UTC).strftime("%Y-%m-%d")
    return _log_dir() / f"{today}.jsonl"


def log_classification(
    *,
    sql: str,
    dialect: str | None = None,
    label: str | None = None,
    has_result_set: bool | None = None,
    is_select: bool | None = None,
    blocked: bool = False,
    diagnostics: list[str] | None = None,
) -> None:
    """Append a classification entry to today's JSONL file."""
    entry = {
        "ts": datetime.now(UTC).isoformat(),
        "dialect": dialect,
        "sql": sql,
        "classification": label,
        "has_result_set": has_result_set,
        "is_select": is_select,
        "blocked": blocked,
        "diagnostics": diagnostics or [],
    }

    log_file = _today_file()
    log_file.parent.mkdir(parents=True, exist_ok=True)
    with open(log_file, "a") as f:
        f.write(json.dumps(entry) + "\n")


def cleanup_old_logs(*, retention_days: int = DEFAULT_RETENTION_DAYS) -> int:
    """Delete log files older than retention_days. Returns count of deleted files."""
    cutoff = datetime.now(UTC) - timedelta(days=retention_days)
    deleted = 0

    log_dir = _log_dir()
    if not log_dir.exists():
        return 0

    for log_file in log_dir.glob("*.jsonl"):
        # YYYY-MM-DD.jsonl
        try:
            file_date = datetime.strptime(log_file.stem, "%Y-%m-%d").replace(tzinfo=UTC)
        except ValueError:
            continue
        if file_date < cutoff:
            log_file.unlink()
            deleted += 1

    # Remove empty project directories
    with contextlib.suppress(OSError):
        log_dir.rmdir()

    return deleted
