"""
Filterable dataset landing page and editions list models.
"""

from typing import ClassVar, List, Tuple
from pydantic import Field

from .dataset_models import Contact
from .page_models import DataPage, EmbeddedPage, ViewModel
from .shared_models import Version


class LandingPageDimension(ViewModel):
    """A dimension summary shown on the landing page."""
    title: str = ""
    values: List[str] = Field(default_factory=list)
    options_url: str = ""
    total_items: int = 0
    description: str = ""


class Publication(ViewModel):
    title: str = ""
    url: str = ""


class Change(ViewModel):
    name: str = ""
    description: str = ""


class Methodology(ViewModel):
    description: str = ""
    url: str = Field(default="", alias="href")
    title: str = ""


class UsageNote(ViewModel):
    note: str = ""
    title: str = ""


class DatasetLandingPage(ViewModel):
    """The data on a filterable dataset landing page."""
    dataset_id: str = ""
    next_release: str = ""
    dimensions: List[LandingPageDimension] = Field(default_factory=list)
    version: Version = Field(default_factory=Version)
    has_older_versions: bool = False
    show_edition_name: bool = False
    edition: str = ""
    release_frequency: str = ""
    is_latest: bool = False
    latest_version_url: str = ""
    is_latest_version_of_edition: bool = Field(default=False, alias="is_latest_version_of_edition_url")
    qmi_url: str = ""
    is_national_statistic: bool = False
    publications: List[Publication] = Field(default_factory=list)
    related_links: List[Publication] = Field(default_factory=list)
    latest_changes: List[Change] = Field(default_factory=list)
    citation: str = ""
    dataset_title: str = ""
    unit_of_measurement: str = ""
    methodologies: List[Methodology] = Field(default_factory=list, alias="methodology")
    nomis_reference_url: str = ""
    usage_notes: List[UsageNote] = Field(default_factory=list, alias="UsageNotes")


class FilterableLandingPage(DataPage[DatasetLandingPage]):
    """Filterable dataset landing page."""
    contact_details: Contact = Field(default_factory=Contact)


class Edition(ViewModel):
    """A single edition linking to its latest version."""
    title: str = ""
    latest_version_url: str = Field(default="", alias="url")


class EditionsListPage(EmbeddedPage):
    """Editions list page.

    Both the base page and the landing page payload are flattened into the
    top level; where they share a key (``dataset_id``, ``dataset_title``) the
    base page wins.
    """

    embedded_fields: ClassVar[Tuple[str, ...]] = ("page", "landing_page")

    landing_page: DatasetLandingPage = Field(default_factory=DatasetLandingPage)
    contact_details: Contact = Field(default_factory=Contact)
    editions: List[Edition] = Field(default_factory=list)
    show_approve: bool = False
