"""Tests for view navigation and derived selections."""

from fineduca.classroom import AppView, Navigator, PointsLedger, ProgressTracker, QuizSelection

from conftest import make_body


def make_navigator(lessons=3):
    course = make_body(lessons).to_course("c1", "Curso")
    catalog = {"c1": course}
    tracker = ProgressTracker(PointsLedger(), catalog.get)
    return Navigator(tracker), tracker, catalog


class TestNavigation:

    def test_starts_on_dashboard(self):
        nav, _, catalog = make_navigator()
        assert nav.view == AppView.DASHBOARD
        assert nav.active_course(catalog) is None

    def test_select_course(self):
        nav, _, catalog = make_navigator()
        nav.select_course("c1")
        assert nav.view == AppView.COURSE
        assert nav.active_course(catalog).id == "c1"

    def test_quiz_flow(self):
        nav, _, catalog = make_navigator()
        nav.start_quiz("c1", 1)
        assert nav.view == AppView.QUIZ
        assert nav.active_quiz_questions(catalog) == list(catalog["c1"].lessons[1].quiz)

        finished = nav.finish_quiz()
        assert finished == QuizSelection("c1", 1)
        assert nav.view == AppView.COURSE
        assert nav.current_quiz is None

    def test_back_to_dashboard_clears_selection(self):
        nav, _, _ = make_navigator()
        nav.start_quiz("c1", 0)
        nav.back_to_dashboard()
        assert nav.view == AppView.DASHBOARD
        assert nav.selected_course_id is None
        assert nav.current_quiz is None


class TestDerivedState:

    def test_unknown_course_yields_none(self):
        nav, _, catalog = make_navigator()
        nav.select_course("missing")
        assert nav.active_course(catalog) is None
        assert nav.active_quiz_questions(catalog) is None

    def test_lesson_index_out_of_range(self):
        nav, _, catalog = make_navigator(lessons=2)
        nav.start_quiz("c1", 5)
        assert nav.active_quiz_questions(catalog) is None

    def test_course_cards(self):
        nav, tracker, catalog = make_navigator(lessons=2)
        tracker.record_quiz_result("c1", 0, 3, 3)
        [card] = nav.course_cards(catalog)
        assert card.completion_percent == 50.0
        assert card.is_completed is False

    def test_status_indicator(self):
        nav, tracker, _ = make_navigator()
        tracker.record_quiz_result("c1", 0, 3, 3)
        nav.start_quiz("c1", 1)
        assert nav.get_status_indicator("c1", 0) == "✓"
        assert nav.get_status_indicator("c1", 1) == "→"
        assert nav.get_status_indicator("c1", 2) == "○"
