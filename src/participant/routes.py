"""
Participant routes for taking quizzes.

Participants can:
- See every available quiz
- Answer a quiz and get their score
- Review their past submissions
"""
from flask import render_template, request, flash, redirect, url_for, current_app
from flask_login import login_required, current_user
from sqlalchemy.exc import SQLAlchemyError

from src.auth.principal import Principal
from src.common.decorators import participant_required
from src.participant import participant_bp
from src.quiz.authoring import QuizAuthoringService
from src.quiz.errors import QuizError
from src.quiz.repositories import QuizRepository, SubmissionRepository
from src.quiz.scoring import SubmissionService
from src.security import csrf_protect


@participant_bp.route('/dashboard')
@login_required
@participant_required
def dashboard():
    try:
        quizzes = QuizAuthoringService().list_quizzes()
    except QuizError as e:
        flash(e.message, 'error')
        quizzes = []
    return render_template('participant/dashboard.html', quizzes=quizzes)


@participant_bp.route('/quiz/<int:quiz_id>')
@login_required
@participant_required
def take_quiz(quiz_id):
    current_app.logger.debug(f"Loading quiz {quiz_id} for {current_user.username}")
    try:
        quiz, questions = SubmissionService().load_quiz_for_play(quiz_id)
    except QuizError as e:
        flash(e.message, 'error')
        return redirect(url_for('participant.dashboard'))
    return render_template('participant/quiz_play.html', quiz=quiz, questions=questions)


@participant_bp.route('/quiz/submit', methods=['POST'])
@login_required
@participant_required
@csrf_protect
def submit_quiz():
    """
    Score the posted answers and show the result.

    Any failure, including a failed save, redirects to the dashboard with
    the error message; results are only shown once the submission is stored.
    """
    quiz_id = request.form.get('quizId', type=int)
    if quiz_id is None:
        current_app.logger.warning("Quiz submission without a valid quizId")
        flash('Quiz not found.', 'error')
        return redirect(url_for('participant.dashboard'))

    principal = Principal.from_user(current_user)
    try:
        result = SubmissionService().submit(quiz_id, request.form, principal)
    except QuizError as e:
        flash(e.message, 'error')
        return redirect(url_for('participant.dashboard'))

    return render_template('participant/result.html', result=result)


@participant_bp.route('/submissions')
@login_required
@participant_required
def submissions():
    """The current participant's past submissions, newest first."""
    try:
        history = SubmissionRepository().find_by_user_id(current_user.id)
        quiz_titles = {quiz.id: quiz.title for quiz in QuizRepository().find_all()}
    except SQLAlchemyError:
        current_app.logger.exception(f"Failed to load submissions for user {current_user.id}")
        flash('Unable to load your submissions. Please try again later.', 'error')
        return redirect(url_for('participant.dashboard'))
    return render_template('participant/submissions.html', submissions=history, quiz_titles=quiz_titles)
