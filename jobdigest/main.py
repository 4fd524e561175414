"""Main entry point for the Job Digest command line."""

from dotenv import load_dotenv
load_dotenv()

import argparse
import os
import sys
import time
from pathlib import Path
from typing import List, Optional, Tuple

from jobdigest.config.environment import EnvironmentConfig
from jobdigest.config.exceptions import ConfigurationError
from jobdigest.config.loader import load_config
from jobdigest.config.models import AppConfig
from jobdigest.domain.models import RunStatus
from jobdigest.logging import get_logger
from jobdigest.logging.config import configure_logging
from jobdigest.notifications.service import NotificationService
from jobdigest.persistence import DEFAULT_STATUS_PATH, PersistenceError, RawDataSink, RunStatusWriter
from jobdigest.pipeline import DigestPipeline
from jobdigest.utils.timestamps import utc_now

logger = get_logger(__name__, component="cli")

STATUS_FILE_NAME = "last_run_status.json"


def load_runtime_config(
    config_path: Optional[Path], log_level_override: Optional[str]
) -> Tuple[AppConfig, EnvironmentConfig]:
    """
    Load configuration and resolve the effective log level.

    Log level priority: CLI > environment > config file.

    Raises:
        ConfigurationError: If configuration is invalid
    """
    app_config, env_config = load_config(config_path)

    if log_level_override:
        env_config.log_level = log_level_override
    elif not env_config.log_level:
        env_config.log_level = app_config.logging.level

    return app_config, env_config


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="job-digest",
        description="Job Digest - fetch, score and email the day's best job matches",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to configuration file (default: config.yaml, then config/config.yaml)",
    )
    parser.add_argument(
        "--validate",
        action="store_true",
        help="Validate configuration and exit",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Run the pipeline but do not send the email",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log level (overrides config and environment)",
    )
    parser.add_argument(
        "--status-file",
        type=Path,
        default=None,
        help=f"Where to write the run status (default: <data_dir>/{STATUS_FILE_NAME})",
    )
    return parser


def write_status(path: Path, status: RunStatus) -> bool:
    """Write the run status, logging instead of raising on failure."""
    try:
        RunStatusWriter(path).write(status)
    except PersistenceError as e:
        logger.error(
            f"Could not write run status: {e}",
            extra={"event": "status.write.failed", "path": str(path)},
        )
        return False
    return True


def main(argv: Optional[List[str]] = None) -> int:
    """
    Run one digest.

    Returns:
        Exit code (0 for success, 1 for a fatal error)
    """
    start_time = time.time()
    args = build_parser().parse_args(argv)
    status_path = args.status_file or DEFAULT_STATUS_PATH

    try:
        # Step 1: Load configuration (before logging, for format detection)
        app_config, env_config = load_runtime_config(args.config, args.log_level)
        if args.status_file is None:
            status_path = Path(app_config.advanced.data_dir) / STATUS_FILE_NAME

        # Step 2: Configure logging
        configure_logging(
            level=env_config.log_level,
            format_type=app_config.logging.format,
            environment=os.environ.get("ENVIRONMENT", "local"),
        )

        if args.validate:
            logger.info(
                "Config valid",
                extra={
                    "event": "config.validated",
                    "enabled_sources": [s.type.value for s in app_config.get_enabled_sources()],
                },
            )
            return 0

        logger.info(
            "Job Digest starting",
            extra={
                "event": "service.starting",
                "config_path": str(args.config) if args.config else None,
                "dry_run": args.dry_run,
            },
        )

        # Step 3: Run the pipeline
        raw_sink = RawDataSink(app_config.advanced.data_dir, timezone=app_config.user.timezone)
        pipeline = DigestPipeline(app_config, env_config, raw_sink=raw_sink)
        result = pipeline.run_once()

        # Step 4: Send the digest
        email_sent = NotificationService().send_digest(
            result.matches,
            str(app_config.user.email),
            env_config,
            app_config.email,
            dry_run=args.dry_run,
        )

        # Step 5: Record the run
        status = RunStatus(
            timestamp=utc_now(),
            success=True,
            jobs_fetched=result.unique_jobs,
            jobs_matched=len(result.matches),
            email_sent=email_sent,
            duration_ms=int((time.time() - start_time) * 1000),
            top_matches=result.matches,
        )
        if not write_status(status_path, status):
            return 1

        logger.info(
            f"Run complete: {result.unique_jobs} jobs fetched, {len(result.matches)} matched, "
            f"email {'sent' if email_sent else 'not sent'}",
            extra={
                "event": "service.run.completed",
                "duration_ms": status.duration_ms,
                "email_sent": email_sent,
            },
        )
        return 0

    except ConfigurationError as e:
        print(f"Configuration Error: {e}", file=sys.stderr)
        logger.error(
            f"Configuration error: {e}",
            extra={"event": "config.error", "error_type": "ConfigurationError"},
        )
        error = e
    except Exception as e:
        print(f"Fatal error: {e}", file=sys.stderr)
        logger.critical(
            "Fatal error during run",
            extra={
                "event": "service.run.failed",
                "error_type": type(e).__name__,
                "error": str(e),
            },
            exc_info=True,
        )
        error = e

    write_status(
        status_path,
        RunStatus(
            timestamp=utc_now(),
            success=False,
            duration_ms=int((time.time() - start_time) * 1000),
            errors=[str(error)],
        ),
    )
    return 1


if __name__ == "__main__":
    sys.exit(main())
