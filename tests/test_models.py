"""
Tests for the dataset, version and Zebedee records.
"""
import json

import pytest
from pydantic import ValidationError

from dataset_controller.models import (
    Contact,
    Correction,
    Dataset,
    DatasetDescription,
    Dimension,
    Download,
    NodeDescription,
    PopulationType,
    CreateCustomDatasetPage,
    TaxonomyNode,
    Version,
    ZebedeeDataset,
    ZebedeeVersion,
)


class TestDatasetModels:
    """Test the dataset metadata records."""

    def test_dataset_serializes_with_fixed_keys(self):
        """Test the documented Dataset payload, byte for byte."""
        dataset = Dataset(id="cpih01", title="Consumer Prices")

        assert dataset.to_json() == (
            '{"id":"cpih01","title":"Consumer Prices","url":"","release_date":"",'
            '"next_release":"","edition":"","version":"",'
            '"contact":{"name":"","telephone":"","email":""}}'
        )

    def test_absent_fields_are_never_missing(self):
        """Test that empty records still emit every key."""
        assert Dimension().to_dict() == {
            "code_list_id": "",
            "id": "",
            "name": "",
            "type": "",
            "values": [],
        }
        assert Contact().to_dict() == {"name": "", "telephone": "", "email": ""}

    def test_dataset_round_trip(self):
        """Test that a fully populated Dataset survives serialization."""
        dataset = Dataset(
            id="cpih01",
            title="Consumer Prices",
            url="/datasets/cpih01",
            release_date="2024-01-17",
            next_release="2024-02-14",
            edition="time-series",
            version="3",
            contact=Contact(name="Prices team", telephone="+44 1633 456900", email="cpi@ons.gov.uk"),
        )

        assert Dataset.from_json(dataset.to_json()) == dataset
        assert Dataset.from_dict(json.loads(dataset.to_json())) == dataset

    def test_dimension_keeps_value_order(self):
        """Test that dimension labels keep their order."""
        dimension = Dimension(
            code_list_id="mmm-yy",
            id="time",
            name="Time",
            type="time",
            values=["Mar-24", "Jan-24", "Feb-24"],
        )

        restored = Dimension.from_json(dimension.to_json())
        assert restored.values == ["Mar-24", "Jan-24", "Feb-24"]
        assert restored.to_dict()["code_list_id"] == "mmm-yy"

    def test_contact_email_is_trimmed(self):
        """Test that surrounding whitespace is stripped from e-mail addresses."""
        contact = Contact(name="Prices team", email="  cpi@ons.gov.uk \n")
        assert contact.email == "cpi@ons.gov.uk"

    def test_records_are_immutable(self):
        """Test that records cannot be changed after construction."""
        dataset = Dataset(id="cpih01")
        with pytest.raises(ValidationError):
            dataset.title = "Changed"

    def test_invalid_payload_raises_value_error(self):
        """Test that malformed payloads are reported as ValueError."""
        with pytest.raises(ValueError, match="Invalid Dataset payload"):
            Dataset.from_json("{not json")
        with pytest.raises(ValueError, match="Invalid Dimension payload"):
            Dimension.from_dict({"values": "not-a-list"})


class TestVersionModels:
    """Test the shared version records."""

    def test_version_defaults(self):
        """Test an empty Version's payload."""
        payload = Version().to_dict()

        assert payload["downloads"] == []
        assert payload["correction"] == []
        assert payload["contact"] == {"name": "", "telephone": "", "email": ""}
        assert payload["version_number"] == 0
        assert payload["is_latest"] is False
        assert payload["is_current"] is False

    def test_version_with_downloads_round_trip(self):
        """Test a Version with downloads and corrections."""
        version = Version(
            title="Consumer Prices",
            edition="time-series",
            version="2",
            version_number=2,
            downloads=[
                Download(extension="csv", size="1024", uri="http://download/cpih01.csv"),
                Download(extension="xls", size="2048", uri="http://download/cpih01.xls"),
            ],
            correction=[Correction(reason="Incorrect weights", date="2024-01-20")],
            is_latest=True,
        )

        restored = Version.from_json(version.to_json())
        assert restored == version
        assert [d.extension for d in restored.downloads] == ["csv", "xls"]


class TestCustomDatasetModels:
    """Test the create-custom-dataset payload keys."""

    def test_population_types_use_capitalised_keys(self):
        """Test that population types serialize under their capitalised names."""
        payload = CreateCustomDatasetPage(population_types=[
            PopulationType(name="UR", label="Usual residents", description="All usual residents"),
        ])

        assert payload.to_dict() == {
            "PopulationTypes": [
                {"Name": "UR", "Label": "Usual residents", "Description": "All usual residents"}
            ]
        }

    def test_population_types_parse_from_wire_keys(self):
        """Test parsing the capitalised keys back."""
        payload = CreateCustomDatasetPage.from_dict({
            "PopulationTypes": [{"Name": "HH", "Label": "Households", "Description": ""}]
        })
        assert payload.population_types[0].label == "Households"


class TestZebedeeModels:
    """Test the Zebedee content records."""

    def test_dataset_uses_camel_case_keys(self):
        """Test parsing a Zebedee dataset response."""
        response = {
            "type": "dataset",
            "uri": "/economy/inflation/datasets/cpih/current",
            "description": {
                "title": "CPIH",
                "edition": "current",
                "releaseDate": "2024-01-17",
                "nextRelease": "14 February 2024",
                "datasetId": "CPIH01",
                "nationalStatistic": True,
                "contact": {"name": "Prices", "email": "cpi@ons.gov.uk ", "telephone": "01633"},
            },
            "downloads": [{"file": "cpih.csv", "size": "100"}],
            "supplementaryFiles": [{"title": "Notes", "file": "notes.pdf", "size": "20"}],
            "versions": [
                {
                    "uri": "/economy/inflation/datasets/cpih/current/previous/v1",
                    "updateDate": "2023-12-13",
                    "correctionNotice": "Corrected weights",
                    "label": "v1",
                }
            ],
        }

        dataset = ZebedeeDataset.from_dict(response)

        assert dataset.description.release_date == "2024-01-17"
        assert dataset.description.national_statistic is True
        assert dataset.description.contact.email == "cpi@ons.gov.uk"
        assert dataset.supplementary_files[0].file == "notes.pdf"
        assert dataset.versions[0].release_date == "2023-12-13"
        assert dataset.versions[0].notice == "Corrected weights"

        payload = dataset.to_dict()
        assert "supplementaryFiles" in payload
        assert payload["versions"][0]["updateDate"] == "2023-12-13"
        assert payload["versions"][0]["correctionNotice"] == "Corrected weights"
        assert payload["description"]["datasetId"] == "CPIH01"

    def test_empty_version_emits_all_keys(self):
        """Test an empty Zebedee version payload."""
        assert ZebedeeVersion().to_dict() == {
            "uri": "",
            "updateDate": "",
            "correctionNotice": "",
            "label": "",
        }

    def test_taxonomy_node(self):
        """Test a taxonomy node round trip."""
        node = TaxonomyNode(
            uri="/economy",
            type="taxonomy_landing_page",
            description=NodeDescription(title="Economy"),
        )

        assert node.to_dict() == {
            "uri": "/economy",
            "description": {"title": "Economy"},
            "type": "taxonomy_landing_page",
        }
        assert TaxonomyNode.from_json(node.to_json()) == node

    def test_description_accepts_field_names(self):
        """Test that records can be built from Python field names too."""
        description = DatasetDescription(release_date="2024-01-17", dataset_id="CPIH01")
        assert description.to_dict()["releaseDate"] == "2024-01-17"
        assert description.to_dict()["datasetId"] == "CPIH01"
