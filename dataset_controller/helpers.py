"""
Dataset URL helpers.
"""

import re
from typing import Tuple

DATASET_VERSION_PATH = re.compile(r"/datasets/(.+)/editions/(.+)/versions/(.+)")


def dataset_version_url(dataset_id: str, edition: str, version) -> str:
    """Build the URL of a dataset version page."""
    return f"/datasets/{dataset_id}/editions/{edition}/versions/{version}"


def extract_dataset_info_from_path(path: str) -> Tuple[str, str, str]:
    """
    Extract the dataset ID, edition and version from a dataset version path.

    Raises:
        ValueError: If the path is not a dataset version path
    """
    match = DATASET_VERSION_PATH.search(path)
    if not match:
        raise ValueError(f"unable to extract datasetID, edition and version from path: {path}")
    return match.group(1), match.group(2), match.group(3)
