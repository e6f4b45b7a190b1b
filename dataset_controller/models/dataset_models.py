"""
Dataset-related data models.

This module contains Pydantic models for a published dataset's metadata,
its contact details and its dimensions.
"""

from typing import List
from pydantic import Field, field_validator

from .page_models import ViewModel


class Contact(ViewModel):
    """Contact details for a dataset or version."""
    name: str = Field(default="", description="Contact name")
    telephone: str = Field(default="", description="Contact telephone number")
    email: str = Field(default="", description="Contact e-mail address")

    @field_validator("email")
    @classmethod
    def _strip_email(cls, value: str) -> str:
        return value.strip()


class Dataset(ViewModel):
    """Metadata for one published statistical dataset."""
    id: str = Field(default="", description="Dataset ID (e.g. 'cpih01')")
    title: str = Field(default="", description="Dataset title")
    url: str = Field(default="", description="Dataset URL")
    release_date: str = Field(default="", description="Release date of the current version")
    next_release: str = Field(default="", description="Expected date of the next release")
    edition: str = Field(default="", description="Edition name")
    version: str = Field(default="", description="Version identifier")
    contact: Contact = Field(default_factory=Contact, description="Dataset contact")


class Dimension(ViewModel):
    """A classification axis attached to a dataset landing page."""
    code_list_id: str = Field(default="", description="ID of the code list backing the dimension")
    id: str = Field(default="", description="Dimension ID")
    name: str = Field(default="", description="Dimension name")
    type: str = Field(default="", description="Dimension type")
    values: List[str] = Field(default_factory=list, description="Ordered value labels")
