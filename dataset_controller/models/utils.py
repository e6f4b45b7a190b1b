"""
Utility functions for looking up and parsing page view-models.

Each page variant is registered under the name of the template that renders
it.
"""

from typing import Any, Dict, Type

from .custom_dataset_models import CustomDatasetPage
from .dataset_page_models import DatasetPage
from .feedback_models import FeedbackPage
from .filterable_models import EditionsListPage, FilterableLandingPage
from .page_models import EmbeddedPage
from .version_models import VersionsPage

PAGE_TEMPLATES: Dict[str, Type[EmbeddedPage]] = {
    "version-list": VersionsPage,
    "create-custom-dataset": CustomDatasetPage,
    "filterable": FilterableLandingPage,
    "edition-list": EditionsListPage,
    "dataset": DatasetPage,
    "feedback": FeedbackPage,
}


def get_page_class(template_name: str) -> Type[EmbeddedPage]:
    """Get the page variant rendered by a template."""
    try:
        return PAGE_TEMPLATES[template_name]
    except KeyError:
        raise ValueError(f"Unknown page template: {template_name}")


def get_template_name(page: EmbeddedPage) -> str:
    """Get the template name a page variant is rendered with."""
    for name, page_cls in PAGE_TEMPLATES.items():
        if type(page) is page_cls:
            return name
    raise ValueError(f"No template registered for {type(page).__name__}")


def parse_page(template_name: str, json_str: str) -> EmbeddedPage:
    """Parse a serialized page for the given template."""
    return get_page_class(template_name).from_json(json_str)


def parse_page_dict(template_name: str, data: Dict[str, Any]) -> EmbeddedPage:
    """Parse a decoded page payload for the given template."""
    return get_page_class(template_name).from_dict(data)
