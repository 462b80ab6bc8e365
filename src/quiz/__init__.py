"""
Quiz domain: models, repositories, and the authoring and submission flows.

Administrators author quizzes and questions; participants submit answers
and receive a score against each question's correct answer.
"""
