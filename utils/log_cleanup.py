"""Layout and cleanup of the dated run folders holding logs and failure screenshots."""

import shutil
from datetime import datetime, timedelta
from pathlib import Path
from typing import Optional

from loguru import logger

DAY_DIR_FORMAT = "%Y %m %d"


def get_log_folder_path(logs_dir: str | Path = "logs", now: Optional[datetime] = None) -> Path:
    """Create and return the run folder for the current date and time."""
    now = now or datetime.now()
    log_path = (
        Path(logs_dir)
        / now.strftime("%Y")
        / now.strftime("%Y %m")
        / now.strftime(DAY_DIR_FORMAT)
        / now.strftime("%Y-%m-%d %H %M")
    )
    log_path.mkdir(parents=True, exist_ok=True)
    return log_path


def _dir_size(path: Path) -> int:
    return sum(f.stat().st_size for f in path.rglob("*") if f.is_file())


def _remove_if_empty(path: Path, dry_run: bool) -> None:
    if not path.exists() or any(path.iterdir()):
        return
    if dry_run:
        logger.info(f"[DRY RUN] Would delete empty dir: {path}")
        return
    path.rmdir()
    logger.debug(f"Deleted empty directory: {path}")


def cleanup_old_runs(
    logs_dir: str | Path = "logs",
    days_to_keep: int = 7,
    dry_run: bool = False,
    now: Optional[datetime] = None,
) -> dict:
    """Remove run folders older than `days_to_keep` days.

    Runs live under `YYYY/YYYY MM/YYYY MM DD/<run>`; whole day folders are
    removed, then month and year folders left empty.

    Returns:
        Dictionary with cleanup statistics
    """
    logs_path = Path(logs_dir)
    stats = {"deleted_dirs": 0, "freed_bytes": 0, "errors": []}

    if not logs_path.exists():
        logger.warning(f"Logs directory does not exist: {logs_path}")
        return stats

    cutoff_date = (now or datetime.now()) - timedelta(days=days_to_keep)
    logger.info(f"Cleaning up runs older than {cutoff_date.strftime('%Y-%m-%d %H:%M:%S')}")

    for year_dir in sorted(p for p in logs_path.iterdir() if p.is_dir()):
        for month_dir in sorted(p for p in year_dir.iterdir() if p.is_dir()):
            for day_dir in sorted(p for p in month_dir.iterdir() if p.is_dir()):
                try:
                    dir_date = datetime.strptime(day_dir.name, DAY_DIR_FORMAT)
                except ValueError:
                    continue
                if dir_date >= cutoff_date:
                    continue

                dir_size = _dir_size(day_dir)
                if dry_run:
                    logger.info(f"[DRY RUN] Would delete: {day_dir} ({dir_size / 1024 / 1024:.2f} MB)")
                else:
                    try:
                        shutil.rmtree(day_dir)
                    except OSError as e:
                        error_msg = f"Failed to delete {day_dir}: {e}"
                        logger.error(error_msg)
                        stats["errors"].append(error_msg)
                        continue
                    logger.info(f"Deleted: {day_dir} ({dir_size / 1024 / 1024:.2f} MB)")
                stats["deleted_dirs"] += 1
                stats["freed_bytes"] += dir_size

            _remove_if_empty(month_dir, dry_run)
        _remove_if_empty(year_dir, dry_run)

    freed_mb = stats["freed_bytes"] / 1024 / 1024
    action = "Would free" if dry_run else "Freed"
    logger.info(
        f"Cleanup {'simulation' if dry_run else 'complete'}: "
        f"{stats['deleted_dirs']} directories, {action} {freed_mb:.2f} MB"
    )
    return stats
