"""
Feedback page and form models.
"""

import re
from typing import List

from pydantic import Field

from .page_models import EmbeddedPage, ViewModel

EMAIL_PATTERN = re.compile(r"^[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,6}$")

WHOLE_SITE = "Whole site"


class FeedbackPage(EmbeddedPage):
    """Feedback form page, re-displayed with the user's input on error."""
    radio: str = ""
    purpose: str = ""
    feedback: str = ""
    name: str = ""
    email: str = ""
    error_type: str = Field(default="", description="Name of the field that failed validation")
    previous_url: str = ""
    service_description: str = ""


class FeedbackForm(ViewModel):
    """A submitted feedback form."""
    purpose: str = ""
    type: str = ""
    uri: str = Field(default="", alias=":uri")
    url: str = ""
    description: str = ""
    name: str = ""
    email: str = ""
    form_type: str = Field(default="", alias="feedback-form-type")

    def check(self, is_positive: bool = False) -> str:
        """
        Find the field the form must be re-displayed for.

        Args:
            is_positive: Whether this is a one-click positive response

        Returns:
            ``"purpose"``, ``"description"`` or ``"email"``, or an empty
            string when the form is acceptable
        """
        if is_positive:
            return ""
        if self.form_type == "page" and not self.purpose:
            return "purpose"
        if not self.description:
            return "description"
        if self.email and not EMAIL_PATTERN.fullmatch(self.email):
            return "email"
        return ""

    def to_message(self, sender: str, recipient: str, is_positive: bool = False) -> str:
        """Render the plain-text e-mail sent to the feedback inbox."""
        description = "Positive feedback received" if is_positive else self.description

        lines: List[str] = [
            f"From: {sender}",
            f"To: {recipient}",
            "Subject: Feedback received",
            "",
        ]
        if self.type:
            lines.append(f"Feedback Type: {self.type}")
        lines.append(f"Page URL: {self.url or WHOLE_SITE}")
        lines.append(f"Description: {description}")
        if self.purpose:
            lines.append(f"Purpose: {self.purpose}")
        if self.name:
            lines.append(f"Name: {self.name}")
        if self.email:
            lines.append(f"Email address: {self.email}")
        return "\n".join(lines) + "\n"
