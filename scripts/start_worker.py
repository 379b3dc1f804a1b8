#!/usr/bin/env python3
# =============================================================================
# scripts/start_worker.py - Celery Worker Entry Point
# =============================================================================
# Starts a worker consuming both the default and dictionary queues.
#
# Usage:
#   python scripts/start_worker.py [--concurrency N]
#
# Prerequisites:
#   - Redis reachable at REDIS_URL
#   - Supabase variables set (.env file)
# =============================================================================

import argparse
import logging
import os
import sys

# Run from a checkout without installing the package
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from workers.celery_app import celery_app  # noqa: E402

logger = logging.getLogger(__name__)


def main() -> None:
    """Start the Celery worker."""
    parser = argparse.ArgumentParser(description="Baakh background worker")
    parser.add_argument("--concurrency", type=int, default=2, help="Worker processes")
    args = parser.parse_args()

    logger.info(f"Starting Baakh worker with concurrency {args.concurrency}")
    celery_app.worker_main([
        "worker",
        "--loglevel=info",
        "--queues=default,dictionary",
        f"--concurrency={args.concurrency}",
    ])


if __name__ == "__main__":
    main()
