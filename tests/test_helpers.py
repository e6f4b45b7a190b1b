"""
Tests for the dataset URL helpers.
"""

import pytest

from dataset_controller.helpers import dataset_version_url, extract_dataset_info_from_path


class TestDatasetVersionUrl:
    """Test building dataset version URLs."""

    def test_builds_version_path(self):
        """Test the version path layout."""
        assert dataset_version_url("cpih01", "time-series", "3") == "/datasets/cpih01/editions/time-series/versions/3"

    def test_accepts_integer_versions(self):
        """Test that version numbers are formatted as-is."""
        assert dataset_version_url("cpih01", "2021", 12) == "/datasets/cpih01/editions/2021/versions/12"


class TestExtractDatasetInfo:
    """Test parsing dataset version paths."""

    def test_extracts_parts(self):
        """Test extracting the dataset ID, edition and version."""
        path = "/datasets/cpih01/editions/time-series/versions/3"
        assert extract_dataset_info_from_path(path) == ("cpih01", "time-series", "3")

    def test_extracts_from_full_url(self):
        """Test that a host prefix is tolerated."""
        url = "http://localhost:22000/datasets/ageing-population/editions/2018/versions/1"
        assert extract_dataset_info_from_path(url) == ("ageing-population", "2018", "1")

    def test_round_trip(self):
        """Test that built URLs parse back to their parts."""
        assert extract_dataset_info_from_path(dataset_version_url("a", "b", "c")) == ("a", "b", "c")

    def test_invalid_path(self):
        """Test that non-version paths are rejected."""
        with pytest.raises(ValueError, match="unable to extract datasetID, edition and version"):
            extract_dataset_info_from_path("/datasets/cpih01/editions/time-series")
