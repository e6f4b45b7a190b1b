"""
Zebedee content models.

These records mirror the JSON the Zebedee content store returns for legacy
datasets and taxonomy nodes. Keys are camelCase on the wire.
"""

from typing import List
from pydantic import Field

from .dataset_models import Contact
from .page_models import ViewModel


class ZebedeeDownload(ViewModel):
    """A downloadable file stored against a dataset."""
    file: str = Field(default="", description="File name relative to the dataset URI")
    size: str = Field(default="", description="File size in bytes")


class ZebedeeSupplementaryFile(ViewModel):
    """A supplementary file stored against a dataset."""
    title: str = ""
    file: str = ""
    size: str = ""


class ZebedeeVersion(ViewModel):
    """A previous version of a dataset."""
    uri: str = ""
    release_date: str = Field(default="", alias="updateDate")
    notice: str = Field(default="", alias="correctionNotice")
    label: str = ""


class DatasetDescription(ViewModel):
    """Descriptive metadata of a dataset or dataset landing page."""
    title: str = ""
    summary: str = ""
    edition: str = ""
    release_date: str = Field(default="", alias="releaseDate")
    next_release: str = Field(default="", alias="nextRelease")
    dataset_id: str = Field(default="", alias="datasetId")
    national_statistic: bool = Field(default=False, alias="nationalStatistic")
    contact: Contact = Field(default_factory=Contact)


class ZebedeeDataset(ViewModel):
    """A legacy dataset (one edition or version) as stored in Zebedee."""
    type: str = ""
    uri: str = ""
    description: DatasetDescription = Field(default_factory=DatasetDescription)
    downloads: List[ZebedeeDownload] = Field(default_factory=list)
    supplementary_files: List[ZebedeeSupplementaryFile] = Field(default_factory=list, alias="supplementaryFiles")
    versions: List[ZebedeeVersion] = Field(default_factory=list)


class Section(ViewModel):
    markdown: str = ""


class ZebedeeDatasetLandingPage(ViewModel):
    """The landing page grouping a legacy dataset's editions."""
    type: str = ""
    uri: str = ""
    description: DatasetDescription = Field(default_factory=DatasetDescription)
    section: Section = Field(default_factory=Section)


class NodeDescription(ViewModel):
    title: str = ""


class TaxonomyNode(ViewModel):
    """A node in the content navigation tree."""
    uri: str = ""
    description: NodeDescription = Field(default_factory=NodeDescription)
    type: str = ""
