"""
UI
==

This module implements the portal pages: login, dashboard, quiz player and
video dialog. The signed-in learner lives in st.session_state and is passed
explicitly to every page.
"""

import logging

import plotly.express as px
import streamlit as st
import streamlit.components.v1 as components

from analytics.metrics import (
    ALL_SUBJECTS, filter_by_subject, find_submission, results_frame, subject_options
)
from dashboard.data_management import (
    authenticate_sync, deliver_result_sync, load_dashboard_sync, refresh_submissions_sync
)
from dashboard.links import download_url, embed_url
from quiz.session import DeliveryStatus, QuizSession
from sheets.errors import PortalError

logger = logging.getLogger(__name__)

GRID_COLUMNS = 4


# ==========================================
# STATE
# ==========================================

def initialize_session_state():
    """Initializes session variables."""
    defaults = {
        'current_user': None,
        'dashboard': None,
        'dashboard_error': None,
        'quiz_session': None,
    }
    for key, value in defaults.items():
        if key not in st.session_state:
            st.session_state[key] = value


def logout():
    st.session_state.current_user = None
    st.session_state.dashboard = None
    st.session_state.dashboard_error = None
    st.session_state.quiz_session = None


# ==========================================
# LOGIN
# ==========================================

def render_login(settings):
    _, center, _ = st.columns([1, 2, 1])
    with center:
        st.title("🎓 Study Portal")
        st.caption("Enter your code to access your study content")

        with st.form("login"):
            code = st.text_input("Your code", placeholder="202300")
            submitted = st.form_submit_button("Sign in", width="stretch")

        if submitted:
            with st.spinner("Checking..."):
                try:
                    st.session_state.current_user = authenticate_sync(settings, code)
                except PortalError as e:
                    st.error(str(e))
                    return
            st.rerun()


# ==========================================
# DASHBOARD
# ==========================================

def load_dashboard(settings, student):
    """Loads the learner's content once per sign-in."""
    if st.session_state.dashboard is not None or st.session_state.dashboard_error:
        return
    with st.spinner("Loading your content..."):
        try:
            st.session_state.dashboard = load_dashboard_sync(settings, student)
        except PortalError as e:
            st.session_state.dashboard_error = str(e)


def render_header(student):
    left, right = st.columns([4, 1])
    with left:
        st.header(f"Welcome, {student.student_name}")
        st.caption(f"Study content available for **{student.academic_year}**")
    with right:
        st.button("Sign out", type="primary", on_click=logout)
    st.divider()


@st.dialog("Lecture", width="large")
def show_video(url):
    components.iframe(url, height=480)


def render_video_card(lecture, index):
    with st.container(border=True):
        if lecture.thumbnail_url:
            st.image(lecture.thumbnail_url, width="stretch")
        st.markdown(f"**{lecture.lecture_name}**")
        st.caption("🎬 Lecture")
        if st.button("▶️ Play", key=f"play_{index}", width="stretch"):
            url = embed_url(lecture.lecture_link)
            if url:
                show_video(url)
            else:
                st.error("The video link is not valid.")


def render_file_card(lecture):
    with st.container(border=True):
        st.markdown(f"**{lecture.lecture_name}**")
        st.caption("📄 File")
        c1, c2 = st.columns(2)
        c1.link_button("Open", lecture.lecture_link, width="stretch")
        c2.link_button("Download", download_url(lecture.lecture_link), width="stretch")


def render_lectures(lectures):
    subjects = subject_options(lectures)
    active_subject = ALL_SUBJECTS
    if len(subjects) > 1:
        active_subject = st.radio("Subject", subjects, horizontal=True, key="subject_filter")

    shown = filter_by_subject(lectures, active_subject)
    if not shown:
        if lectures:
            st.info("No content for this subject.")
        else:
            st.info("No lectures are available for this academic year yet.")
        return

    columns = st.columns(GRID_COLUMNS)
    for index, lecture in enumerate(shown):
        with columns[index % GRID_COLUMNS]:
            if lecture.is_video:
                render_video_card(lecture, index)
            else:
                render_file_card(lecture)


def start_quiz(quiz, student):
    st.session_state.quiz_session = QuizSession(quiz, student)


def render_quizzes(student, quizzes, submissions):
    if not quizzes:
        st.info("No quizzes are available for this academic year yet.")
        return

    columns = st.columns(3)
    for index, quiz in enumerate(quizzes):
        submission = find_submission(submissions, quiz)
        with columns[index % 3]:
            with st.container(border=True):
                st.markdown(f"### 📝 {quiz.title}")
                st.caption(f"{len(quiz.questions)} questions")
                if submission:
                    st.success(f"Completed. Your score: **{submission.score}**")
                else:
                    st.button("Start quiz", key=f"start_{quiz.id}", width="stretch",
                              on_click=start_quiz, args=(quiz, student))


def render_results(quizzes, submissions):
    df = results_frame(quizzes, submissions)
    if df.empty:
        st.info("No quizzes are available for this academic year yet.")
        return

    c1, c2 = st.columns(2)
    c1.metric("Completed", f"{int(df['Completed'].sum())}/{len(df)}")
    avg = df["Percent"].dropna().mean() if df["Percent"].notna().any() else 0.0
    c2.metric("Average", f"{avg:.1f}%")

    done = df[df["Percent"].notna()]
    if not done.empty:
        fig = px.bar(done, x="Quiz", y="Percent", range_y=[0, 100], text="Score")
        fig.update_layout(height=320, margin=dict(l=10, r=10, t=10, b=10), showlegend=False)
        st.plotly_chart(fig, width="stretch")

    st.dataframe(df[["Quiz", "Questions", "Score", "Completed"]], hide_index=True, width="stretch")


def render_dashboard(settings, student):
    render_header(student)
    load_dashboard(settings, student)

    if st.session_state.dashboard_error:
        st.error(st.session_state.dashboard_error)
        if st.button("Retry"):
            st.session_state.dashboard_error = None
            st.rerun()
        return

    data = st.session_state.dashboard
    tab_lectures, tab_quizzes, tab_results = st.tabs(["Lectures", "Quizzes", "My results"])
    with tab_lectures:
        render_lectures(data.lectures)
    with tab_quizzes:
        render_quizzes(student, data.quizzes, data.submissions)
    with tab_results:
        render_results(data.quizzes, data.submissions)


# ==========================================
# QUIZ PLAYER
# ==========================================

def finish_quiz(settings, student):
    st.session_state.quiz_session = None
    if st.session_state.dashboard is not None:
        st.session_state.dashboard.submissions = refresh_submissions_sync(settings, student)


def render_graded(settings, session):
    st.header("Quiz complete!")
    st.write(f"Your score in \"{session.quiz.title}\":")
    st.markdown(f"## {session.score} / {session.total}")

    status = st.empty()
    st.button("Back to dashboard", type="primary", width="stretch",
              on_click=finish_quiz, args=(settings, session.student))

    if session.delivery_status is DeliveryStatus.PENDING:
        status.info("Sending your result...")
        deliver_result_sync(settings, session)

    if session.delivery_status is DeliveryStatus.FAILED:
        status.error(session.delivery_error)
    else:
        status.success("Your result was sent!")


def render_quiz_player(settings, session):
    if session.is_graded:
        render_graded(settings, session)
        return

    st.header(session.quiz.title)
    if session.question_count == 0:
        st.info("This quiz has no questions.")
    else:
        st.caption(f"Question {session.current_index + 1} of {session.question_count}")
        st.subheader(session.current_question.question_text)

        selected = session.selected_answer()
        for index, option in enumerate(session.shuffled_options()):
            st.button(
                option,
                key=f"option_{session.current_index}_{index}",
                type="primary" if option == selected else "secondary",
                width="stretch",
                on_click=session.answer_current,
                args=(option,),
            )

    st.divider()
    left, right = st.columns(2)
    left.button("Previous", disabled=session.is_first, on_click=session.prev)
    if session.is_last:
        right.button("Finish quiz", type="primary", on_click=session.submit)
    else:
        right.button("Next", on_click=session.next)
