"""Admin routes for authoring quizzes and their questions."""
from flask import render_template, request, flash, redirect, url_for, current_app
from flask_login import login_required, current_user

from src.admin import admin_bp
from src.common.decorators import admin_required
from src.quiz.authoring import QuizAuthoringService
from src.quiz.errors import InternalError, QuizError
from src.quiz.models import Question, Quiz
from src.security import csrf_protect


def parse_options(raw: str) -> list[str]:
    """Split the options textarea into one option per non-blank line."""
    return [line.strip() for line in (raw or "").splitlines() if line.strip()]


@admin_bp.route('/dashboard')
@login_required
@admin_required
def dashboard():
    """Admin dashboard listing every quiz."""
    current_app.logger.debug(f"Loading admin dashboard for {current_user.username}")
    try:
        quizzes = QuizAuthoringService().list_quizzes()
    except QuizError as e:
        flash(e.message, 'error')
        quizzes = []
    return render_template('admin/quiz_list.html', quizzes=quizzes)


@admin_bp.route('/quiz/new')
@login_required
@admin_required
def new_quiz():
    return render_template('admin/quiz_form.html', quiz=Quiz(), is_new_quiz=True)


@admin_bp.route('/quiz/save', methods=['POST'])
@login_required
@admin_required
@csrf_protect
def save_quiz():
    title = (request.form.get('title') or '').strip()
    quiz = Quiz(
        id=request.form.get('id', type=int),
        title=title,
        description=(request.form.get('description') or '').strip() or None,
    )
    if not title:
        flash('Quiz title is required.', 'error')
        return render_template('admin/quiz_form.html', quiz=quiz, is_new_quiz=True), 400

    try:
        QuizAuthoringService().save_quiz(quiz)
    except QuizError as e:
        flash(e.message, 'error')
        return render_template('admin/quiz_form.html', quiz=quiz, is_new_quiz=True)

    flash('Quiz saved successfully.', 'success')
    return redirect(url_for('admin.dashboard'))


@admin_bp.route('/quiz/<int:quiz_id>/questions')
@login_required
@admin_required
def manage_questions(quiz_id):
    """Question management page: existing questions plus a form for a new one."""
    try:
        quiz, questions = QuizAuthoringService().get_quiz_with_questions(quiz_id)
    except QuizError as e:
        flash(e.message, 'error')
        return redirect(url_for('admin.dashboard'))

    return render_template(
        'admin/quiz_form.html',
        quiz=quiz,
        questions=questions,
        question=Question(quiz_id=quiz_id, options=[]),
        is_new_quiz=False,
    )


@admin_bp.route('/question/save', methods=['POST'])
@login_required
@admin_required
@csrf_protect
def save_question():
    question = Question(
        id=request.form.get('id', type=int),
        quiz_id=request.form.get('quiz_id', type=int),
        question_text=(request.form.get('question_text') or '').strip(),
        options=parse_options(request.form.get('options')),
        correct_answer=request.form.get('correct_answer'),
    )
    service = QuizAuthoringService()

    try:
        service.save_question(question)
    except InternalError as e:
        flash(e.message, 'error')
        # Keep the form data on screen when the quiz itself is still there
        try:
            quiz, questions = service.get_quiz_with_questions(question.quiz_id)
        except QuizError:
            return redirect(url_for('admin.dashboard'))
        return render_template(
            'admin/quiz_form.html', quiz=quiz, questions=questions,
            question=question, is_new_quiz=False,
        )
    except QuizError as e:
        flash(e.message, 'error')
        return redirect(url_for('admin.dashboard'))

    flash('Question saved successfully.', 'success')
    return redirect(url_for('admin.manage_questions', quiz_id=question.quiz_id))
