"""
Versions list page models.
"""

from typing import List
from pydantic import Field

from .page_models import DataPage, ViewModel
from .shared_models import Version


class VersionsList(ViewModel):
    """The data on the versions list page."""
    latest_version_url: str = Field(default="", description="URL of the latest version of the edition")
    versions: List[Version] = Field(default_factory=list, description="Versions, newest first")
    feedback_api_url: str = Field(default="", description="Optional feedback API link")


class VersionsPage(DataPage[VersionsList]):
    """Versions list page: base page plus a VersionsList."""
