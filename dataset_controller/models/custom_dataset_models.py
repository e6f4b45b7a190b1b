"""
Create-custom-dataset page models.

The population type records serialize under their capitalised names
(``PopulationTypes``, ``Name``, ``Label``, ``Description``); templates read
them that way.
"""

from typing import List
from pydantic import Field

from .page_models import DataPage, ViewModel


class PopulationType(ViewModel):
    """A population type selectable in the dataset builder."""
    name: str = Field(default="", alias="Name")
    label: str = Field(default="", alias="Label")
    description: str = Field(default="", alias="Description")


class CreateCustomDatasetPage(ViewModel):
    """Payload of the create-custom-dataset page."""
    population_types: List[PopulationType] = Field(default_factory=list, alias="PopulationTypes")


class CustomDatasetPage(DataPage[CreateCustomDatasetPage]):
    """Create-custom-dataset page with census branding flags."""
    is_national_statistic: bool = False
    show_census_branding: bool = False
