"""
CatalogLoader - Merge cached courses with freshly generated ones.

Two paths fill the catalog:
- reconcile(): load every cached course, then generate each missing seed
  topic in declared order, persisting each result immediately and pacing
  consecutive generator calls. The first failure aborts the pass; courses
  resolved before it stay cached, so the next pass only fills the gaps.
- generate_on_demand(): one user-requested topic, no pacing, rejected up
  front when its derived id already exists.

Both paths run under one asyncio.Lock so two generations can never race to
cache the same id.
"""

import asyncio
import logging
from types import MappingProxyType
from typing import Callable, Iterable, Mapping, Optional

from fineduca.errors import DuplicateTopicError, GenerationError
from fineduca.generation.base import ContentGenerator
from fineduca.schemas import Course, Difficulty
from fineduca.storage.sync import PersistenceSynchronizer

from .pacing import Pacer
from .topics import SEED_TOPICS, SeedTopic, topic_id_for


logger = logging.getLogger(__name__)


class CatalogLoader:
    """Owns the course catalog."""

    def __init__(
        self,
        generator: ContentGenerator,
        sync: PersistenceSynchronizer,
        seed_topics: Iterable[SeedTopic] = SEED_TOPICS,
        pacer: Optional[Pacer] = None,
        status_callback: Optional[Callable[[str], None]] = None,
    ):
        """
        Initialize loader.

        Args:
            generator: External content generator
            sync: Synchronizer used to read and write the course cache
            seed_topics: Topics generated automatically when not cached
            pacer: Spacing between seed generator calls (default: 1s)
            status_callback: Receives loading messages for display
        """
        self.generator = generator
        self.sync = sync
        self.seed_topics = tuple(seed_topics)
        self.pacer = pacer or Pacer()
        self._status_callback = status_callback
        self._courses: dict[str, Course] = {}
        self._lock = asyncio.Lock()

    @property
    def courses(self) -> Mapping[str, Course]:
        """Read-only live view of the catalog."""
        return MappingProxyType(self._courses)

    def get_course(self, course_id: str) -> Optional[Course]:
        return self._courses.get(course_id)

    def _report(self, message: str):
        if self._status_callback:
            self._status_callback(message)

    # -------------------------------------------------------------------------
    # Seed reconciliation
    # -------------------------------------------------------------------------

    async def reconcile(self) -> dict[str, Course]:
        """
        Fill catalog gaps for every seed topic.

        Returns:
            Snapshot of the full catalog (cached + generated)

        Raises:
            GenerationError: If any generator call fails; the pass stops there
        """
        async with self._lock:
            cached = self.sync.load_courses()
            self._courses.update(cached)
            logger.info(f"Catalog: {len(cached)} cached courses")

            missing = [topic for topic in self.seed_topics if topic.id not in self._courses]
            for i, topic in enumerate(missing, 1):
                self._report(f"Gerando curso: {topic.title}...")
                logger.info(f"[{i}/{len(missing)}] Generating seed topic {topic.id}...")
                try:
                    await self._generate(topic.id, topic.title, Difficulty.BEGINNER, paced=True)
                except GenerationError:
                    logger.error(f"Reconciliation aborted at {topic.id}; {i - 1} new courses kept")
                    raise

            self._report("")
            return dict(self._courses)

    # -------------------------------------------------------------------------
    # On-demand generation
    # -------------------------------------------------------------------------

    async def generate_on_demand(
        self,
        topic_title: str,
        difficulty: Difficulty = Difficulty.BEGINNER,
    ) -> Course:
        """
        Generate and cache a course for a user-chosen topic.

        Raises:
            DuplicateTopicError: If the normalized topic already has a course
            GenerationError: If the generator call fails
        """
        course_id = topic_id_for(topic_title)
        if course_id in self._courses:
            raise DuplicateTopicError(course_id)

        async with self._lock:
            # a reconcile pass or another request may have added it meanwhile
            if course_id in self._courses:
                raise DuplicateTopicError(course_id)
            return await self._generate(course_id, topic_title.strip(), difficulty, paced=False)

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    async def _generate(self, course_id: str, title: str, difficulty: Difficulty, paced: bool) -> Course:
        if paced:
            await self.pacer.wait()
        try:
            body = await self.generator.generate_course(title, difficulty)
        except GenerationError:
            raise
        except Exception as e:
            raise GenerationError(
                f"Failed to generate course content for \"{title}\". Please try again.",
                topic=title,
            ) from e
        finally:
            if paced:
                self.pacer.mark()

        course = body.to_course(course_id, title)
        self._courses[course_id] = course
        self.sync.save_course(course)
        logger.info(f"Cached course {course_id} ({course.lesson_count} lessons)")
        return course
