"""
Submission module.

Validates submission forms and writes ideas to the data store.
"""

from src.submission.workflow import (
    IdeaSubmissionWorkflow,
    SubmissionForm,
    SubmissionResult,
    SubmissionError,
    FormValidationError,
)

__all__ = [
    "IdeaSubmissionWorkflow",
    "SubmissionForm",
    "SubmissionResult",
    "SubmissionError",
    "FormValidationError",
]
