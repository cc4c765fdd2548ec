#!/usr/bin/env python3
"""
warm_course_cache.py - Pre-generate seed courses into the state store.

Runs the same reconciliation pass the app runs at startup, so the first
browser session opens straight onto a full catalog. Extra topics can be
generated on demand in the same run.

Usage:
  python scripts/warm_course_cache.py                                 # Seed topics only
  python scripts/warm_course_cache.py --topics "Fundos Imobiliários"  # Plus user topics
  python scripts/warm_course_cache.py --db-path /tmp/state.db --api-sleep 2
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

# Project root for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from fineduca.catalog import CatalogLoader, Pacer
from fineduca.config import Settings
from fineduca.errors import DuplicateTopicError, FinEducaError, GenerationError
from fineduca.generation import GeminiClient, GeminiCourseGenerator
from fineduca.schemas import Difficulty
from fineduca.storage import PersistenceSynchronizer, SQLiteStore


logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


async def warm_cache(loader: CatalogLoader, topics: list[str], difficulty: Difficulty) -> tuple[list[str], list[str]]:
    """Reconcile seeds, then generate each extra topic. Returns (generated, failed)."""
    before = set(loader.sync.load_courses())
    generated = []
    failed = []

    try:
        courses = await loader.reconcile()
    except GenerationError as e:
        logger.error(f"  ✗ Seed reconciliation stopped: {e}")
        failed.append("seed topics")
        courses = dict(loader.courses)
    generated.extend(course_id for course_id in courses if course_id not in before)

    for i, topic in enumerate(topics, 1):
        logger.info(f"[{i}/{len(topics)}] Generating {topic}...")
        try:
            course = await loader.generate_on_demand(topic, difficulty)
        except DuplicateTopicError as e:
            logger.info(f"  - Skipped: {e.topic_id} already cached")
            continue
        except GenerationError as e:
            logger.error(f"  ✗ Failed: {e}")
            failed.append(topic)
            continue
        generated.append(course.id)
        logger.info(f"  ✓ Generated: {course.title} ({course.lesson_count} lessons)")

    return generated, failed


def main():
    parser = argparse.ArgumentParser(
        description="Pre-generate FinEduca courses into the state store",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    parser.add_argument(
        "--topics",
        nargs="*",
        default=[],
        help="Extra topics to generate after the seed topics"
    )
    parser.add_argument(
        "--difficulty",
        choices=[level.value for level in Difficulty],
        default=Difficulty.BEGINNER.value,
        help="Difficulty for extra topics (default: beginner)"
    )
    parser.add_argument(
        "--db-path",
        type=Path,
        help="SQLite state file (default: FINEDUCA_DB_PATH or ~/.fineduca/state.db)"
    )
    parser.add_argument(
        "--api-sleep",
        type=float,
        help="Seconds between seed generation calls (default: FINEDUCA_PACING_SECONDS or 1.0)"
    )

    args = parser.parse_args()

    settings = Settings.from_env()
    if args.db_path:
        settings = settings.model_copy(update={"db_path": args.db_path})
    if args.api_sleep is not None:
        settings = settings.model_copy(update={"pacing_seconds": args.api_sleep})

    try:
        client = GeminiClient.from_settings(settings)
    except FinEducaError as e:
        logger.error(f"ERROR: {e}")
        sys.exit(1)

    logger.info(f"Using model: {settings.model}")
    logger.info(f"State store: {settings.db_path}")

    loader = CatalogLoader(
        GeminiCourseGenerator(client),
        PersistenceSynchronizer(SQLiteStore(settings.db_path)),
        pacer=Pacer(settings.pacing_seconds),
    )
    generated, failed = asyncio.run(warm_cache(loader, args.topics, Difficulty(args.difficulty)))

    # Summary
    logger.info("\n" + "=" * 50)
    logger.info("SUMMARY")
    logger.info("=" * 50)
    logger.info(f"Generated: {len(generated)} courses")
    logger.info(f"Cached total: {len(loader.courses)} courses")
    logger.info(f"Failed: {len(failed)}")
    if failed:
        logger.info(f"Failed: {', '.join(failed)}")
        sys.exit(1)


if __name__ == "__main__":
    main()
