"""
Version-related data models shared across page types.
"""

from typing import List
from pydantic import Field

from .dataset_models import Contact
from .page_models import ViewModel


class Download(ViewModel):
    """Details for one of a dataset version's downloadable files."""
    extension: str = Field(default="", description="File extension (e.g. 'csv')")
    size: str = Field(default="", description="File size in bytes")
    uri: str = Field(default="", description="Download URI")


class Correction(ViewModel):
    """A single correction made to a version."""
    reason: str = ""
    date: str = ""


class Version(ViewModel):
    """A published edition/version of a dataset."""
    title: str = ""
    description: str = ""
    url: str = ""
    release_date: str = ""
    next_release: str = ""
    downloads: List[Download] = Field(default_factory=list)
    edition: str = ""
    version: str = ""
    contact: Contact = Field(default_factory=Contact)
    is_current: bool = False
    version_url: str = ""
    superseded: str = Field(default="", description="URL of the version this one replaces")
    version_number: int = 0
    date: str = ""
    correction: List[Correction] = Field(default_factory=list)
    filter_url: str = ""
    is_latest: bool = False
