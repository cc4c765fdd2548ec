"""Tests for quiz progress tracking and completion awards."""

from itertools import permutations

import pytest

from fineduca.classroom import (
    COURSE_COMPLETED_POINTS,
    QUIZ_PASSED_POINTS,
    PointsLedger,
    ProgressTracker,
)
from fineduca.schemas import PointReason, Progress

from conftest import FixedClock, make_body


def make_tracker(lessons=3, loaded=True, progress=None):
    course = make_body(lessons).to_course("t1", "Orçamento")
    catalog = {"t1": course} if loaded else {}
    ledger = PointsLedger(clock=FixedClock())
    tracker = ProgressTracker(ledger, catalog.get, progress)
    return tracker, ledger, catalog, course


class TestQuizResults:

    def test_below_threshold_changes_nothing(self):
        tracker, ledger, _, _ = make_tracker()
        outcome = tracker.record_quiz_result("t1", 0, 2, 3)
        assert outcome.passed is False
        assert ledger.total() == 0
        assert tracker.passed_lessons("t1") == set()

    def test_threshold_is_inclusive(self):
        tracker, ledger, _, _ = make_tracker()
        outcome = tracker.record_quiz_result("t1", 0, 7, 10)
        assert outcome.passed and outcome.first_pass
        assert ledger.total() == QUIZ_PASSED_POINTS

    def test_first_pass_awards_points(self):
        tracker, ledger, _, _ = make_tracker()
        outcome = tracker.record_quiz_result("t1", 0, 3, 3)
        assert outcome.points_awarded == QUIZ_PASSED_POINTS
        assert tracker.is_lesson_passed("t1", 0)
        assert ledger.events[0].reason == PointReason.QUIZ_PASSED

    def test_repeat_pass_is_idempotent(self):
        tracker, ledger, _, _ = make_tracker()
        tracker.record_quiz_result("t1", 0, 3, 3)
        outcome = tracker.record_quiz_result("t1", 0, 3, 3)
        assert outcome.passed is True
        assert outcome.first_pass is False
        assert outcome.points_awarded == 0
        assert ledger.total() == QUIZ_PASSED_POINTS

    def test_failing_after_pass_keeps_pass(self):
        tracker, ledger, _, _ = make_tracker()
        tracker.record_quiz_result("t1", 0, 3, 3)
        tracker.record_quiz_result("t1", 0, 0, 3)
        assert tracker.is_lesson_passed("t1", 0)
        assert ledger.total() == QUIZ_PASSED_POINTS

    def test_on_change_only_on_transition(self):
        calls = []
        tracker, _, _, _ = make_tracker()
        tracker._on_change = lambda: calls.append(1)
        tracker.record_quiz_result("t1", 0, 1, 3)
        tracker.record_quiz_result("t1", 0, 3, 3)
        tracker.record_quiz_result("t1", 0, 3, 3)
        assert len(calls) == 1


class TestCourseCompletion:

    @pytest.mark.parametrize("order", list(permutations([0, 1, 2])))
    def test_all_lessons_in_any_order_total_250(self, order):
        tracker, ledger, _, _ = make_tracker(lessons=3)
        for index in order:
            tracker.record_quiz_result("t1", index, 3, 3)
        assert ledger.total() == 3 * QUIZ_PASSED_POINTS + COURSE_COMPLETED_POINTS == 250
        assert tracker.is_course_completed("t1")

    def test_completion_outcome(self):
        tracker, _, _, _ = make_tracker(lessons=2)
        tracker.record_quiz_result("t1", 0, 3, 3)
        outcome = tracker.record_quiz_result("t1", 1, 3, 3)
        assert outcome.course_completed is True
        assert outcome.points_awarded == QUIZ_PASSED_POINTS + COURSE_COMPLETED_POINTS

    def test_completion_awarded_once(self):
        tracker, ledger, _, _ = make_tracker(lessons=1)
        tracker.record_quiz_result("t1", 0, 3, 3)
        tracker.record_quiz_result("t1", 0, 3, 3)
        reasons = [event.reason for event in ledger.events]
        assert reasons.count(PointReason.COURSE_COMPLETED) == 1
        assert tracker.completed_course_ids() == ["t1"]

    def test_unloaded_course_defers_completion(self):
        tracker, ledger, catalog, course = make_tracker(lessons=2, loaded=False)
        tracker.record_quiz_result("t1", 0, 3, 3)
        tracker.record_quiz_result("t1", 1, 3, 3)
        assert not tracker.is_course_completed("t1")
        assert ledger.total() == 2 * QUIZ_PASSED_POINTS

        # Course loads later; nothing happens until the next quiz event
        catalog["t1"] = course
        assert not tracker.is_course_completed("t1")

    def test_restored_progress(self):
        progress = Progress(courses_completed=[], quizzes_passed={"t1": [0, 1]})
        tracker, ledger, _, _ = make_tracker(lessons=3, progress=progress)
        outcome = tracker.record_quiz_result("t1", 2, 3, 3)
        assert outcome.course_completed
        assert ledger.total() == QUIZ_PASSED_POINTS + COURSE_COMPLETED_POINTS

    def test_progress_snapshot_is_a_copy(self):
        tracker, _, _, _ = make_tracker()
        tracker.record_quiz_result("t1", 0, 3, 3)
        snapshot = tracker.progress
        snapshot.quizzes_passed["t1"].append(2)
        assert not tracker.is_lesson_passed("t1", 2)

    def test_completion_percent(self):
        tracker, _, _, course = make_tracker(lessons=4)
        assert tracker.course_completion_percent(course) == 0.0
        tracker.record_quiz_result("t1", 0, 3, 3)
        assert tracker.course_completion_percent(course) == 25.0
