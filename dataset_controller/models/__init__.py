"""
Models package for page view-models.

This package contains the Pydantic records the controller fills from
upstream API responses and hands to the renderer.
"""

from .page_models import (
    ViewModel,
    Page,
    Metadata,
    Breadcrumb,
    CookiesPolicy,
    FeatureFlags,
    PageError,
    ErrorItem,
    EmbeddedPage,
    DataPage,
)

from .dataset_models import (
    Dataset,
    Contact,
    Dimension,
)

from .shared_models import (
    Download,
    Correction,
    Version,
)

from .version_models import (
    VersionsList,
    VersionsPage,
)

from .custom_dataset_models import (
    PopulationType,
    CreateCustomDatasetPage,
    CustomDatasetPage,
)

from .filterable_models import (
    LandingPageDimension,
    Publication,
    Change,
    Methodology,
    UsageNote,
    DatasetLandingPage,
    FilterableLandingPage,
    Edition,
    EditionsListPage,
)

from .dataset_page_models import (
    DatasetDownload,
    SupplementaryFile,
    PreviousVersion,
    DatasetDetails,
    DatasetPage,
)

from .zebedee_models import (
    ZebedeeDownload,
    ZebedeeSupplementaryFile,
    ZebedeeVersion,
    DatasetDescription,
    ZebedeeDataset,
    ZebedeeDatasetLandingPage,
    Section,
    TaxonomyNode,
    NodeDescription,
)

from .feedback_models import (
    FeedbackPage,
    FeedbackForm,
)

from .utils import (
    PAGE_TEMPLATES,
    get_page_class,
    get_template_name,
    parse_page,
    parse_page_dict,
)

__all__ = [
    # Base page
    "ViewModel",
    "Page",
    "Metadata",
    "Breadcrumb",
    "CookiesPolicy",
    "FeatureFlags",
    "PageError",
    "ErrorItem",
    "EmbeddedPage",
    "DataPage",

    # Dataset records
    "Dataset",
    "Contact",
    "Dimension",
    "Download",
    "Correction",
    "Version",

    # Page variants and payloads
    "VersionsList",
    "VersionsPage",
    "PopulationType",
    "CreateCustomDatasetPage",
    "CustomDatasetPage",
    "LandingPageDimension",
    "Publication",
    "Change",
    "Methodology",
    "UsageNote",
    "DatasetLandingPage",
    "FilterableLandingPage",
    "Edition",
    "EditionsListPage",
    "DatasetDownload",
    "SupplementaryFile",
    "PreviousVersion",
    "DatasetDetails",
    "DatasetPage",
    "FeedbackPage",
    "FeedbackForm",

    # Zebedee content
    "ZebedeeDownload",
    "ZebedeeSupplementaryFile",
    "ZebedeeVersion",
    "DatasetDescription",
    "ZebedeeDataset",
    "ZebedeeDatasetLandingPage",
    "Section",
    "TaxonomyNode",
    "NodeDescription",

    # Utilities
    "PAGE_TEMPLATES",
    "get_page_class",
    "get_template_name",
    "parse_page",
    "parse_page_dict",
]
