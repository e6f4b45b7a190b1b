"""
Legacy dataset page models.

The dataset page lists an individual dataset's files and previous versions.
Its contact details are flattened into the top level alongside the base page.
"""

from typing import ClassVar, List, Tuple
from pydantic import Field

from .dataset_models import Contact
from .page_models import DataPage, ViewModel


class DatasetDownload(ViewModel):
    """Details for an individual dataset's downloadable file."""
    extension: str = ""
    size: str = ""
    uri: str = ""
    file: str = ""
    download_url: str = ""


class SupplementaryFile(ViewModel):
    """A downloadable file associated with an individual dataset."""
    title: str = ""
    extension: str = ""
    size: str = ""
    uri: str = ""
    download_url: str = ""


class PreviousVersion(ViewModel):
    """Details for a previous version of the dataset."""
    uri: str = Field(default="", alias="url")
    update_date: str = ""
    correction_notice: str = ""
    label: str = ""
    downloads: List[DatasetDownload] = Field(default_factory=list)


class DatasetDetails(ViewModel):
    """File and title information for an individual dataset."""
    versions: List[PreviousVersion] = Field(default_factory=list)
    supplementary_files: List[SupplementaryFile] = Field(default_factory=list)
    downloads: List[DatasetDownload] = Field(default_factory=list)
    is_national_statistic: bool = Field(default=False, alias="national_statistic")
    release_date: str = ""
    next_release: str = ""
    dataset_id: str = ""
    uri: str = ""
    edition: str = ""
    markdown: str = ""
    parent_path: str = ""
    enable_feedback_api: bool = False
    feedback_api_url: str = ""


class DatasetPage(DataPage[DatasetDetails]):
    """Dataset page: base page, dataset details and flattened contact."""

    embedded_fields: ClassVar[Tuple[str, ...]] = ("page", "contact")

    contact: Contact = Field(default_factory=Contact)
