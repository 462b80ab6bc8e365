"""Failures raised by the quiz authoring and submission flows."""


class QuizError(Exception):
    """Base class; ``message`` is safe to show to the user."""

    message = "Unable to process the request. Please try again."

    def __init__(self, message: str | None = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class QuizNotFound(QuizError):
    message = "Quiz not found."

    def __init__(self, quiz_id, message: str | None = None):
        self.quiz_id = quiz_id
        super().__init__(message)


class MissingParent(QuizError):
    message = "Quiz ID is missing. Please try again."


class NoQuestions(QuizError):
    message = "No questions available for this quiz."

    def __init__(self, quiz_id, message: str | None = None):
        self.quiz_id = quiz_id
        super().__init__(message)


class InternalError(QuizError):
    message = "Unable to process quiz submission."


class MalformedAnswerKey(ValueError):
    """An answer field named ``question_<id>`` whose id is not a number."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"Invalid question ID format: {key}")
