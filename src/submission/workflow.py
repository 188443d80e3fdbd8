"""
Idea submission workflow.

Turns a filled-in submission form into stored records:

    validate -> find/create user (by email) -> insert idea -> bump category counter

The idea insert is the success boundary. Failures before or at it are
surfaced as SubmissionError; a failure incrementing the analytics counter
afterwards is logged and otherwise ignored.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import List, Optional

from src.models.category import Category
from src.models.idea import Idea, User
from src.storage.base import Store, StoreError

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

SUBMISSION_FAILED_MESSAGE = "There was an error submitting your idea. Please try again."


class FormValidationError(ValueError):
    """A form was rejected before anything was written."""

    def __init__(self, errors: List[str]):
        self.errors = errors
        super().__init__(f"Form validation failed: {'; '.join(errors)}")


class SubmissionError(Exception):
    """Writing the user or idea failed."""

    def __init__(self, message: str = SUBMISSION_FAILED_MESSAGE, cause: Optional[Exception] = None):
        self.cause = cause
        super().__init__(message)


def clean_text(value):
    """Strip strings, map None to "", leave other values for validation."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip()
    return value


@dataclass
class SubmissionForm:
    """
    User-entered submission form.

    Text values are stripped on construction and None becomes "". Anything
    else is kept as-is and rejected by validate().
    """
    name: str
    email: str
    title: str
    description: str
    category: str

    FIELDS = ("name", "email", "title", "description", "category")

    def __post_init__(self) -> None:
        for field_name in self.FIELDS:
            setattr(self, field_name, clean_text(getattr(self, field_name)))

    def validate(self) -> None:
        """
        Validate that every field is present and well-formed.

        Raises:
            FormValidationError: Listing every problem found.
        """
        errors = []

        for field_name in self.FIELDS:
            value = getattr(self, field_name)
            if not isinstance(value, str):
                errors.append(f"{field_name} must be text")
            elif not value:
                errors.append(f"{field_name} is required")

        if isinstance(self.email, str) and self.email and not EMAIL_PATTERN.match(self.email):
            errors.append(f"email is not a valid address: {self.email}")

        if isinstance(self.category, str) and self.category and not Category.is_valid(self.category):
            valid = ", ".join(c.value for c in Category)
            errors.append(f"category must be one of: {valid}")

        if errors:
            raise FormValidationError(errors)


@dataclass
class SubmissionResult:
    """Outcome of a successful submission."""
    user: User
    idea: Idea
    user_created: bool
    analytics_recorded: bool = True
    warnings: List[str] = field(default_factory=list)


class IdeaSubmissionWorkflow:
    """
    Writes a submission to the data store.

    Usage:
        workflow = IdeaSubmissionWorkflow(store)
        result = workflow.submit("Ada", "ada@example.com", "Title", "Desc", "kinaxis")
    """

    def __init__(self, store: Store):
        self.store = store

    def submit(
        self,
        name: str,
        email: str,
        title: str,
        description: str,
        category: str,
    ) -> SubmissionResult:
        """
        Submit an idea.

        Raises:
            FormValidationError: If the form is invalid (nothing is written).
            SubmissionError: If the user lookup/create or the idea insert fails.
        """
        form = SubmissionForm(name, email, title, description, category)
        form.validate()

        try:
            user, user_created = self._resolve_user(form)
            idea = self.store.insert_idea(
                user_id=user.id,
                title=form.title,
                description=form.description,
                category=form.category,
            )
        except StoreError as e:
            logger.error("Idea submission failed: %s", e)
            raise SubmissionError(cause=e) from e

        result = SubmissionResult(user=user, idea=idea, user_created=user_created)

        try:
            self.store.increment_idea_count(form.category)
        except Exception as e:
            logger.warning("Analytics update failed for category %s: %s", form.category, e)
            result.analytics_recorded = False
            result.warnings.append(f"Analytics update failed: {e}")

        logger.info(
            "Idea %s submitted by user %s (%s)",
            idea.id,
            user.id,
            "new user" if user_created else "existing user",
        )
        return result

    def _resolve_user(self, form: SubmissionForm) -> tuple[User, bool]:
        """Reuse the user with this email, or create one."""
        existing = self.store.find_user_by_email(form.email)
        if existing:
            return existing, False
        return self.store.create_user(name=form.name, email=form.email), True
