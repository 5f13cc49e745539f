"""Runner for the Enketo end-to-end browser suites."""

import argparse
import sys
import unittest
from datetime import datetime
from pathlib import Path
from typing import List

from loguru import logger
from tqdm import tqdm

from utils.log_cleanup import cleanup_old_runs, get_log_folder_path
from utils.notify import send_error_notification
from utils.settings import get_settings

# Constants
LOGS_DIR = "logs"
E2E_DIR = Path(__file__).parent / "tests" / "e2e"
DAYS_TO_KEEP = 7


def setup_logging(log_folder_path: Path) -> None:
    """Configure loguru logger with file outputs for debug and info levels.

    Args:
        log_folder_path: Directory where log files will be saved
    """
    timestamp = datetime.now().strftime("%Y-%m-%d %H %M")
    debug_path = log_folder_path / f"debug_{timestamp}.log"
    info_path = log_folder_path / f"info_{timestamp}.log"

    logger.remove()
    logger.add(sys.stderr, level="INFO")
    logger.add(
        debug_path,
        rotation="5 MB",
        level="DEBUG",
        backtrace=True,
        diagnose=True,
        retention="3 days",
        compression="zip"
    )
    logger.add(
        info_path,
        rotation="5 MB",
        level="INFO",
        retention="3 days",
        compression="zip"
    )


def discover_suites(pattern: str = "test_*.py") -> List[unittest.TestSuite]:
    """Collect one suite per e2e test module."""
    suites = []
    for path in sorted(E2E_DIR.rglob(pattern)):
        # Modules live in plain folders, so each is discovered from its own directory.
        suite = unittest.TestLoader().discover(str(path.parent), pattern=path.name, top_level_dir=str(path.parent))
        if suite.countTestCases():
            suites.append(suite)
    logger.debug(f"Discovered {len(suites)} e2e suites under {E2E_DIR}")
    return suites


def run_suites(suites: List[unittest.TestSuite], verbosity: int = 1) -> List[str]:
    """Run each suite and return the ids of failed or errored tests."""
    failed: List[str] = []
    runner = unittest.TextTestRunner(verbosity=verbosity)

    for suite in tqdm(suites, desc="Running e2e suites"):
        result = runner.run(suite)
        for test, _ in result.failures + result.errors:
            logger.error(f"Failed: {test.id()}")
            failed.append(test.id())
        logger.info(
            f"Ran {result.testsRun} tests: {len(result.failures)} failures, "
            f"{len(result.errors)} errors, {len(result.skipped)} skipped"
        )
    return failed


def parse_args(argv: List[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--pattern", default="test_*.py", help="test module pattern")
    parser.add_argument("--days-to-keep", type=int, default=DAYS_TO_KEEP, help="keep run folders this many days")
    parser.add_argument("--verbose", "-v", action="store_true")
    return parser.parse_args(argv)


def main(argv: List[str] | None = None) -> int:
    """Main entry point for the e2e runner."""
    args = parse_args(argv)
    settings = get_settings()

    log_folder_path = get_log_folder_path(LOGS_DIR)
    setup_logging(log_folder_path)
    cleanup_old_runs(LOGS_DIR, days_to_keep=args.days_to_keep)

    if not settings.e2e_enabled:
        logger.warning("CHT_URL is not set; browser suites will be skipped")
    logger.info(f"Running e2e suites against {settings.cht_url}")

    failed = run_suites(discover_suites(args.pattern), verbosity=2 if args.verbose else 1)
    if failed:
        send_error_notification(f"{len(failed)} e2e tests failed:\n" + "\n".join(failed))
        return 1
    logger.success("All e2e suites passed")
    return 0


if __name__ == "__main__":
    try:
        sys.exit(main())
    except Exception as e:
        logger.exception("Fatal error in e2e run")
        send_error_notification(str(e))
        sys.exit(1)
