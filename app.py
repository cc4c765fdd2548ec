"""
FinEduca - Financial Education Tracker

Streamlit application with AI-generated personal finance courses, lesson
quizzes, user goals, a points ledger and a customizable profile.

Usage:
    streamlit run app.py
"""

import asyncio
import base64
import logging

import streamlit as st

from fineduca.app_state import FinEducaApp
from fineduca.classroom import AppView, PASS_RATIO
from fineduca.errors import FinEducaError
from fineduca.schemas import CourseIcon, Difficulty
from fineduca.themes import THEMES


logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(message)s",
)

# -----------------------------------------------------------------------------
# Configuration
# -----------------------------------------------------------------------------

COURSE_ICONS = {
    CourseIcon.TAX: "🧾",
    CourseIcon.INVESTMENT: "📈",
    CourseIcon.BUDGET: "💰",
}

DIFFICULTY_LABELS = {
    Difficulty.BEGINNER: "Iniciante",
    Difficulty.INTERMEDIATE: "Intermediário",
}

st.set_page_config(
    page_title="FinEduca",
    page_icon="💰",
    layout="wide",
    initial_sidebar_state="expanded",
)


# -----------------------------------------------------------------------------
# Session State Initialization
# -----------------------------------------------------------------------------

def init_session_state():
    """Create the app once per session and run the startup pass."""
    if "app" not in st.session_state:
        status = st.empty()
        try:
            st.session_state.app = FinEducaApp.from_settings(
                status_callback=lambda message: status.info(message) if message else status.empty(),
            )
        except FinEducaError as e:
            st.session_state.app = None
            st.session_state.load_error = str(e)
            return

        with st.spinner("Carregando cursos..."):
            result = asyncio.run(st.session_state.app.startup())
        status.empty()
        st.session_state.load_error = result.error

    if "quiz_answers" not in st.session_state:
        st.session_state.quiz_answers = {}

    if "generation_message" not in st.session_state:
        st.session_state.generation_message = None

    if "avatar_preview" not in st.session_state:
        st.session_state.avatar_preview = None


def apply_theme_css(app: FinEducaApp):
    """Inject the active theme's CSS variables."""
    variables = "\n".join(f"{name}: {value};" for name, value in app.theme.colors.items())
    st.markdown(f"""
    <style>
    :root {{
        {variables}
    }}
    .stProgress > div > div > div > div {{
        background-color: {app.theme.rgb("--color-primary")};
    }}
    </style>
    """, unsafe_allow_html=True)


# -----------------------------------------------------------------------------
# Sidebar: Profile and Goals
# -----------------------------------------------------------------------------

def render_sidebar(app: FinEducaApp):
    """Render profile, points, theme picker and goals."""
    st.sidebar.title("💰 FinEduca")

    if app.avatar:
        st.sidebar.image(base64.b64decode(app.avatar), width=96)
    st.sidebar.metric("Pontos", app.total_points)

    st.sidebar.divider()
    render_goals()

    st.sidebar.divider()
    render_profile_settings(app)


def render_goals():
    """Render the goal list with add/toggle controls."""
    app = st.session_state.app
    st.sidebar.subheader("Metas")

    with st.sidebar.form("new_goal", clear_on_submit=True):
        text = st.text_input("Nova meta", placeholder="Ex.: Guardar R$ 200 por mês")
        if st.form_submit_button("Adicionar") and text.strip():
            app.add_goal(text.strip())
            st.rerun()

    for goal in app.goal_list:
        checked = st.sidebar.checkbox(goal.text, value=goal.completed, key=f"goal_{goal.id}")
        if checked != goal.completed:
            app.toggle_goal(goal.id)
            st.rerun()


def render_profile_settings(app: FinEducaApp):
    """Render theme selector and avatar generation."""
    st.sidebar.subheader("Perfil")

    theme_ids = [theme.id for theme in THEMES]
    selected = st.sidebar.selectbox(
        "Tema",
        theme_ids,
        index=theme_ids.index(app.theme.id),
        format_func=lambda theme_id: next(t.name for t in THEMES if t.id == theme_id),
    )
    if selected != app.theme.id:
        app.change_theme(selected)
        st.rerun()

    with st.sidebar.expander("Gerar avatar"):
        prompt = st.text_input("Descreva seu avatar", key="avatar_prompt")
        if st.button("Gerar", disabled=not prompt.strip()):
            try:
                with st.spinner("Gerando avatar..."):
                    st.session_state.avatar_preview = asyncio.run(app.generate_avatar(prompt.strip()))
            except FinEducaError as e:
                st.error(str(e))

        preview = st.session_state.avatar_preview
        if preview:
            st.image(base64.b64decode(preview), width=128)
            if st.button("Salvar avatar", type="primary"):
                app.save_avatar(preview)
                st.session_state.avatar_preview = None
                st.rerun()

        if app.avatar and st.button("Remover avatar"):
            app.save_avatar(None)
            st.rerun()


# -----------------------------------------------------------------------------
# Dashboard
# -----------------------------------------------------------------------------

def render_dashboard(app: FinEducaApp):
    """Render stats, points chart, course cards and the topic request form."""
    st.title("Painel")

    stats = app.dashboard_stats()
    col1, col2, col3 = st.columns(3)
    col1.metric("Cursos concluídos", f"{stats.completed_courses}/{stats.total_courses}")
    col2.metric("Pontos", stats.total_points)
    col3.metric("Metas concluídas", f"{stats.completed_goals}/{stats.total_goals}")

    by_day = app.points_by_day()
    if by_day:
        st.subheader("Evolução de pontos")
        st.bar_chart({"Pontos": {day.isoformat(): points for day, points in by_day}})

    st.divider()
    st.subheader("Cursos")

    cards = app.navigator.course_cards(app.courses)
    columns = st.columns(3)
    for i, card in enumerate(cards):
        course = card.course
        with columns[i % 3]:
            with st.container(border=True):
                st.markdown(f"### {COURSE_ICONS[course.icon]} {course.title}")
                st.caption(DIFFICULTY_LABELS[course.difficulty])
                st.write(course.description)
                st.progress(card.completion_percent / 100)
                if card.is_completed:
                    st.success("Concluído")
                if st.button("Abrir curso", key=f"open_{course.id}", use_container_width=True):
                    app.select_course(course.id)
                    st.rerun()

    st.divider()
    render_topic_request(app)


def render_topic_request(app: FinEducaApp):
    """Form to generate a course on a user-chosen topic."""
    st.subheader("Gerar novo curso")

    with st.form("new_course", clear_on_submit=True):
        topic = st.text_input("Tópico", placeholder="Ex.: Fundos Imobiliários")
        difficulty = st.selectbox(
            "Nível",
            list(Difficulty),
            format_func=lambda level: DIFFICULTY_LABELS[level],
        )
        submitted = st.form_submit_button("Gerar curso")

    if submitted and topic.strip():
        with st.spinner(f"Gerando curso: {topic.strip()}..."):
            result = asyncio.run(app.request_new_course(topic, difficulty))
        st.session_state.generation_message = result.message
        if result.course:
            app.select_course(result.course.id)
        st.rerun()

    if st.session_state.generation_message:
        st.warning(st.session_state.generation_message)


# -----------------------------------------------------------------------------
# Course View
# -----------------------------------------------------------------------------

def render_course_view(app: FinEducaApp):
    """Render the active course's lessons."""
    course = app.active_course()
    if course is None:
        app.back_to_dashboard()
        st.rerun()
        return

    if st.button("← Voltar ao painel"):
        app.back_to_dashboard()
        st.session_state.generation_message = None
        st.rerun()

    st.title(f"{COURSE_ICONS[course.icon]} {course.title}")
    st.write(course.description)

    nav = app.navigator
    for index, lesson in enumerate(course.lessons):
        indicator = nav.get_status_indicator(course.id, index)
        with st.expander(f"{indicator} {lesson.title}"):
            st.markdown(lesson.content)
            label = "Refazer quiz" if app.tracker.is_lesson_passed(course.id, index) else "Fazer quiz"
            if st.button(label, key=f"quiz_{course.id}_{index}"):
                st.session_state.quiz_answers = {}
                app.start_quiz(course.id, index)
                st.rerun()


# -----------------------------------------------------------------------------
# Quiz View
# -----------------------------------------------------------------------------

def render_quiz_view(app: FinEducaApp):
    """Render the active quiz and submit its score."""
    questions = app.active_quiz_questions()
    if not questions:
        app.navigator.finish_quiz()
        st.rerun()
        return

    course = app.active_course()
    quiz = app.navigator.current_quiz
    st.title(course.lessons[quiz.lesson_index].title)
    st.caption(f"Acerte pelo menos {int(PASS_RATIO * 100)}% para passar.")

    answers = st.session_state.quiz_answers
    for i, question in enumerate(questions):
        answers[i] = st.radio(
            f"**{i + 1}.** {question.question}",
            range(len(question.options)),
            format_func=lambda option, q=question: q.options[option],
            index=None,
            key=f"answer_{quiz.course_id}_{quiz.lesson_index}_{i}",
        )

    col1, col2 = st.columns(2)
    with col1:
        if st.button("Cancelar"):
            app.navigator.finish_quiz()
            st.rerun()
    with col2:
        if st.button("Enviar respostas", type="primary", disabled=None in answers.values()):
            score = sum(1 for i, q in enumerate(questions) if answers.get(i) == q.correct_answer_index)
            outcome = app.complete_quiz(score, len(questions))
            if outcome and outcome.first_pass:
                st.toast(f"+{outcome.points_awarded} pontos!")
            elif outcome and not outcome.passed:
                st.toast(f"Você acertou {score}/{len(questions)}. Tente novamente!")
            st.session_state.quiz_answers = {}
            st.rerun()


# -----------------------------------------------------------------------------
# Main App
# -----------------------------------------------------------------------------

def main():
    """Main application entry point."""
    init_session_state()
    app = st.session_state.app

    if st.session_state.load_error:
        st.error(st.session_state.load_error)
        if st.button("Tentar novamente"):
            del st.session_state["app"]
            st.rerun()
        return

    apply_theme_css(app)
    render_sidebar(app)

    if app.view == AppView.DASHBOARD:
        render_dashboard(app)
    elif app.view == AppView.COURSE:
        render_course_view(app)
    elif app.view == AppView.QUIZ:
        render_quiz_view(app)


if __name__ == "__main__":
    main()
