"""
Mappers that build page view-models from upstream data.

Inputs are decoded dataset API payloads (plain dictionaries) or Zebedee
content records; outputs are immutable page variants ready to serialize.
"""
import logging
import posixpath
import re
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional, Sequence
from urllib.parse import urlparse

from config_manager import AppConfig, FeedbackConfig, get_app_config, get_feedback_config
from .helpers import dataset_version_url
from .models import (
    Breadcrumb,
    Contact,
    CreateCustomDatasetPage,
    CustomDatasetPage,
    DatasetDetails,
    DatasetDownload,
    DatasetLandingPage,
    DatasetPage,
    Download,
    Correction,
    Edition,
    EditionsListPage,
    ErrorItem,
    FeatureFlags,
    FeedbackForm,
    FeedbackPage,
    FilterableLandingPage,
    LandingPageDimension,
    Methodology,
    Page,
    PageError,
    PopulationType,
    Publication,
    PreviousVersion,
    SupplementaryFile,
    TaxonomyNode,
    UsageNote,
    Change,
    Version,
    VersionsList,
    VersionsPage,
    ZebedeeDataset,
    ZebedeeDatasetLandingPage,
    ZebedeeDownload,
)

logger = logging.getLogger(__name__)

CORRECTION_ALERT_TYPE = "correction"
NOMIS_DATASET_TYPE = "nomis"
TIME_SERIES_EDITION = "time-series"
DIMENSION_TIME = "time"
DIMENSION_AGE = "age"
TRUNCATED_OPTIONS_COUNT = 10

FEEDBACK_SERVICES = {
    "cmd": "Customising data by applying filters",
    "dev": "ONS developer website",
}
FEEDBACK_DESCRIPTION_LENGTH = 50

# A '%' not followed by two hex digits makes a URI unparseable
INVALID_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


class UnknownServiceError(ValueError):
    """Raised when a feedback page is requested for an unknown service."""


def build_base_page(uri: str, language: str = "", service_message: str = "",
                    app_config: Optional[AppConfig] = None,
                    feedback_config: Optional[FeedbackConfig] = None) -> Page:
    """Build the base page every page variant starts from.

    Args:
        uri: Path of the requested page
        language: Page language; defaults to the configured language
        service_message: Site-wide service message, if any
        app_config: Application settings; loaded from configuration if omitted
        feedback_config: Feedback settings; loaded from configuration if omitted

    Returns:
        A base page carrying the configured feature flags
    """
    app_config = app_config or get_app_config()
    feedback_config = feedback_config or get_feedback_config()
    return Page(
        uri=uri,
        language=language or app_config.default_language,
        service_message=service_message,
        site_domain=app_config.site_domain,
        pattern_library_assets_path=app_config.pattern_library_assets_path,
        beta_banner_enabled=True,
        feature_flags=FeatureFlags(
            enable_feedback_api=feedback_config.enable_feedback_api,
            feedback_api_url=feedback_config.feedback_api_url,
        ),
    )


def _with_metadata(page: Page, **metadata: Any) -> Dict[str, Any]:
    return {"metadata": page.metadata.model_copy(update=metadata)}


def _trim_breadcrumb_uri(uri: str, api_router_version: str) -> str:
    """Trim the API router version prefix from a breadcrumb URI, if present."""
    if not api_router_version:
        return uri
    if INVALID_ESCAPE.search(uri):
        logger.warning(f"Wrong format for breadcrumb uri: {uri}")
        return uri
    parsed = urlparse(uri)
    path = parsed.path
    if path.startswith(api_router_version):
        path = path[len(api_router_version):]
    return parsed._replace(path=path).geturl()


def map_breadcrumbs(nodes: Iterable[TaxonomyNode], api_router_version: str = "") -> List[Breadcrumb]:
    """Map Zebedee taxonomy nodes to page breadcrumbs."""
    return [
        Breadcrumb(title=node.description.title, uri=_trim_breadcrumb_uri(node.uri, api_router_version))
        for node in nodes
    ]


def map_first_contact(dataset: Dict[str, Any]) -> Contact:
    """Map the first of a dataset's contacts, or an empty contact."""
    contacts = dataset.get("contacts") or []
    if not contacts:
        return Contact()
    first = contacts[0]
    return Contact(
        name=first.get("name", ""),
        telephone=first.get("telephone", ""),
        email=first.get("email", ""),
    )


def map_version_downloads(downloads: Dict[str, Dict[str, Any]], skip_missing: bool = False) -> List[Download]:
    """Map a dataset API downloads object keyed by file extension."""
    mapped = []
    for extension, download in (downloads or {}).items():
        href = download.get("href", "")
        if skip_missing and not href:
            continue
        mapped.append(Download(extension=extension, size=download.get("size", ""), uri=href))
    return mapped


def map_corrections(version: Dict[str, Any]) -> List[Correction]:
    """Map a version's correction alerts."""
    return [
        Correction(reason=alert.get("description", ""), date=alert.get("date", ""))
        for alert in version.get("alerts") or []
        if alert.get("type") == CORRECTION_ALERT_TYPE
    ]


def create_versions_list(base_page: Page, dataset: Dict[str, Any], edition: Dict[str, Any],
                         versions: Sequence[Dict[str, Any]]) -> VersionsPage:
    """Create a versions list page from dataset API responses.

    Args:
        base_page: Page built by ``build_base_page``
        dataset: Dataset details
        edition: The edition whose versions are listed
        versions: The edition's versions in API order

    Returns:
        Versions page with versions sorted newest first
    """
    title = f"All versions of {dataset.get('title', '')}"
    if versions:
        title += f" {versions[0].get('edition', '')}"
    title += " dataset"

    latest_version_id = edition.get("links", {}).get("latest_version", {}).get("id", "")
    latest_version_url = dataset_version_url(dataset.get("id", ""), edition.get("edition", ""), latest_version_id)

    mapped: List[Dict[str, Any]] = []
    latest_version_number = 1
    for ver in versions:
        number = ver.get("version", 0)
        version_dataset_id = ver.get("links", {}).get("dataset", {}).get("id", "")
        version_url = dataset_version_url(version_dataset_id, ver.get("edition", ""), number)

        superseded = ""
        # Not the first version, and a version has already been listed
        if number > 1 and mapped:
            previous_number = mapped[-1]["version_number"]
            superseded = dataset_version_url(version_dataset_id, ver.get("edition", ""), previous_number)

        latest_version_number = max(latest_version_number, number)

        mapped.append({
            "title": dataset.get("title", ""),
            "version_number": number,
            "date": ver.get("release_date", ""),
            "version_url": version_url,
            "filter_url": version_url + "/filter",
            "superseded": superseded,
            "downloads": map_version_downloads(ver.get("downloads")),
            "correction": map_corrections(ver),
        })

    for fields in mapped:
        if fields["version_number"] == latest_version_number:
            fields["is_latest"] = True
            break

    ordered = sorted(mapped, key=lambda fields: fields["version_number"], reverse=True)
    logger.debug(f"Mapped {len(ordered)} versions for dataset {dataset.get('id', '')}")

    feedback_api_url = base_page.feature_flags.feedback_api_url if base_page.feature_flags.enable_feedback_api else ""
    page = base_page.model_copy(update={
        "dataset_id": dataset.get("id", ""),
        **_with_metadata(base_page, title=title),
    })
    return VersionsPage(
        page=page,
        data=VersionsList(
            latest_version_url=latest_version_url,
            versions=[Version(**fields) for fields in ordered],
            feedback_api_url=feedback_api_url,
        ),
    )


def create_editions_list(base_page: Page, dataset: Dict[str, Any], editions: Sequence[Dict[str, Any]],
                         dataset_id: str, breadcrumbs: Iterable[TaxonomyNode],
                         api_router_version: str = "") -> EditionsListPage:
    """Create an editions list page from dataset API responses."""
    # Zebedee's breadcrumbs stop at the parent page, so the dataset itself is appended
    trail = map_breadcrumbs(breadcrumbs, api_router_version)
    trail.append(Breadcrumb(title=dataset.get("title", "")))

    page = base_page.model_copy(update={
        "type": "dataset_edition_list",
        "dataset_id": dataset_id,
        "breadcrumb": trail,
        **_with_metadata(base_page, title=dataset.get("title", ""), description=dataset.get("description", "")),
    })

    mapped_editions = [
        Edition(
            title=edition.get("edition", ""),
            latest_version_url=dataset_version_url(
                dataset_id,
                edition.get("edition", ""),
                edition.get("links", {}).get("latest_version", {}).get("id", ""),
            ),
        )
        for edition in editions
    ]

    return EditionsListPage(
        page=page,
        landing_page=DatasetLandingPage(dataset_id=dataset_id, next_release=dataset.get("next_release", "")),
        contact_details=map_first_contact(dataset),
        editions=mapped_editions,
    )


def _parse_labels(labels: Sequence[str], fmt: str) -> Optional[List[datetime]]:
    """Parse every label with ``fmt``; None when the first label does not match."""
    try:
        datetime.strptime(labels[0], fmt)
    except ValueError:
        return None
    parsed = []
    for label in labels:
        try:
            parsed.append(datetime.strptime(label, fmt))
        except ValueError:
            logger.warning(f"Unable to convert date label {label!r} with format {fmt}")
    return sorted(parsed)


def summarise_months(times: List[datetime]) -> List[str]:
    """Collapse sorted month dates into runs of consecutive months."""
    values = []
    start = times[0]
    for i, current in enumerate(times):
        if i != len(times) - 1:
            following = times[i + 1]
            if following.month - current.month == 1 or (current.month == 12 and following.month == 1):
                continue
        if start.year == current.year and start.month == current.month:
            values.append(f"This year {start.year} contains data for the month {start:%B}")
        else:
            values.append(f"All months between {start:%B} {start.year} and {current:%B} {current.year}")
        if i != len(times) - 1:
            start = times[i + 1]
    return values


def summarise_years(times: List[datetime]) -> List[str]:
    """Collapse sorted year dates into runs of consecutive years."""
    values = []
    start = times[0]
    for i, current in enumerate(times):
        if i != len(times) - 1 and times[i + 1].year - current.year == 1:
            continue
        if start.year == current.year:
            values.append(f"This year contains data for {start.year}")
        else:
            values.append(f"All years between {start.year} and {current.year}")
        if i != len(times) - 1:
            start = times[i + 1]
    return values


def _sort_numeric(values: List[str]) -> List[str]:
    try:
        numbers = [int(value) for value in values]
    except ValueError:
        return values
    return [str(number) for number in sorted(numbers)]


def map_options_to_dimensions(dataset_type: str, dimensions: Sequence[Dict[str, Any]],
                              options: Sequence[Dict[str, Any]], latest_version_url: str,
                              max_number_of_options: int) -> List[LandingPageDimension]:
    """Summarise dimension options for the landing page.

    Month and year options are collapsed into ranges; other options are
    listed, truncated when there are more than ``max_number_of_options``.
    Nomis datasets get empty dimension summaries.
    """
    mapped = []
    version_path = urlparse(latest_version_url).path
    for option in options:
        items = option.get("items") or []
        if not items or dataset_type == NOMIS_DATASET_TYPE:
            mapped.append(LandingPageDimension())
            continue

        dimension_id = items[0].get("dimension", "")
        title = dimension_id.title()
        name = ""
        description = ""
        for dimension in dimensions:
            if dimension.get("name") == dimension_id:
                name = dimension.get("name", "")
                description = dimension.get("description", "")
                if dimension.get("label"):
                    title = dimension["label"]

        total_count = option.get("total_count", 0)
        labels = [item.get("label", "") for item in items]

        months = _parse_labels(labels, "%b-%y")
        years = None if months is not None else _parse_labels(labels, "%Y")
        if months:
            values = summarise_months(months)
        elif years:
            values = summarise_years(years)
        else:
            values = labels
            if total_count > max_number_of_options:
                values = values[:TRUNCATED_OPTIONS_COUNT]
            if dimension_id in (DIMENSION_TIME, DIMENSION_AGE):
                values = _sort_numeric(values)

        mapped.append(LandingPageDimension(
            title=title,
            values=values,
            options_url=f"{version_path}/dimensions/{dimension_id}/options",
            total_items=total_count,
            description=description,
        ))
        logger.debug(f"Mapped dimension {dimension_id} with {len(values)} values")
    return mapped


def create_filterable_landing_page(base_page: Page, dataset: Dict[str, Any], version: Dict[str, Any],
                                   dataset_id: str, options: Sequence[Dict[str, Any]],
                                   dimensions: Sequence[Dict[str, Any]], show_other_versions: bool,
                                   breadcrumbs: Iterable[TaxonomyNode], latest_version_number: int,
                                   latest_version_url: str, api_router_version: str = "",
                                   max_number_of_options: int = 20) -> FilterableLandingPage:
    """Create a filterable dataset landing page from dataset API responses."""
    dataset_type = dataset.get("type", "")
    links = dataset.get("links", {})
    version_links = version.get("links", {})

    trail: List[Breadcrumb] = []
    if dataset_type == NOMIS_DATASET_TYPE:
        trail.append(Breadcrumb(title="Home", uri="/"))
    trail.extend(map_breadcrumbs(breadcrumbs, api_router_version))

    # Zebedee's breadcrumbs stop above the dataset, so add the dataset and edition
    edition_title = version_links.get("edition", {}).get("id", "")
    if edition_title == TIME_SERIES_EDITION:
        edition_title = "Current"
    dataset_path = _trim_breadcrumb_uri(urlparse(links.get("self", {}).get("href", "")).path, api_router_version)
    trail.append(Breadcrumb(title=dataset.get("title", ""), uri=dataset_path))
    trail.append(Breadcrumb(title=edition_title))

    page = base_page.model_copy(update={
        "type": "dataset_landing_page",
        "release_date": version.get("release_date", ""),
        "breadcrumb": trail,
    })

    edition = version.get("edition", "")
    landing_page = DatasetLandingPage(
        dataset_id=dataset_id,
        next_release=dataset.get("next_release", ""),
        unit_of_measurement=dataset.get("unit_of_measure", ""),
        nomis_reference_url=dataset.get("nomis_reference_url", "") if dataset_type == NOMIS_DATASET_TYPE else "",
        edition=edition,
        show_edition_name=edition != TIME_SERIES_EDITION,
        is_latest=links.get("latest_version", {}).get("href", "") == version_links.get("self", {}).get("href", ""),
        latest_version_url=latest_version_url,
        is_latest_version_of_edition=latest_version_number == version.get("version", 0),
        qmi_url=dataset.get("qmi", {}).get("href", ""),
        is_national_statistic=dataset.get("national_statistic", False),
        release_frequency=dataset.get("release_frequency", "").title(),
        citation=dataset.get("license", ""),
        usage_notes=[
            UsageNote(title=note.get("title", ""), note=note.get("note", ""))
            for note in version.get("usage_notes") or []
        ] if dataset_type == NOMIS_DATASET_TYPE else [],
        methodologies=[
            Methodology(title=m.get("title", ""), url=m.get("href", ""), description=m.get("description", ""))
            for m in dataset.get("methodologies") or []
        ],
        publications=[
            Publication(title=p.get("title", ""), url=p.get("href", ""))
            for p in dataset.get("publications") or []
        ],
        related_links=[
            Publication(title=r.get("title", ""), url=r.get("href", ""))
            for r in dataset.get("related_datasets") or []
        ],
        latest_changes=[
            Change(name=c.get("name", ""), description=c.get("description", ""))
            for c in version.get("latest_changes") or []
        ],
        has_older_versions=show_other_versions,
        version=Version(
            title=dataset.get("title", ""),
            description=dataset.get("description", ""),
            edition=edition,
            version=str(version.get("version", "")),
            downloads=map_version_downloads(version.get("downloads"), skip_missing=True),
        ),
        dimensions=map_options_to_dimensions(
            dataset_type,
            dimensions,
            options,
            links.get("latest_version", {}).get("href", ""),
            max_number_of_options,
        ) if options else [],
    )

    return FilterableLandingPage(
        page=page,
        data=landing_page,
        contact_details=map_first_contact(dataset),
    )


def create_custom_dataset_page(base_page: Page, uri: str, population_types: Iterable[Dict[str, Any]],
                               language: str = "en", has_error: bool = False) -> CustomDatasetPage:
    """Create the create-custom-dataset page listing population types."""
    title = "Create a custom dataset"
    error = PageError()
    if has_error:
        error = PageError(
            title="Select a population type",
            error_items=[ErrorItem(description="Select a population type", url="#population-type")],
            language=language,
        )

    page = base_page.model_copy(update={
        "uri": uri,
        "language": language,
        "beta_banner_enabled": True,
        "breadcrumb": [Breadcrumb(title="Home", uri="/"), Breadcrumb(title="Census", uri="/census")],
        "error": error,
        **_with_metadata(base_page, title=title, description=title),
    })

    return CustomDatasetPage(
        page=page,
        data=CreateCustomDatasetPage(population_types=[
            PopulationType(
                name=population.get("name", ""),
                label=population.get("label", ""),
                description=population.get("description", ""),
            )
            for population in population_types
        ]),
        show_census_branding=True,
    )


def _find_version(versions: Iterable[ZebedeeDataset], uri: str) -> ZebedeeDataset:
    for candidate in versions:
        if candidate.uri == uri:
            return candidate
    return ZebedeeDataset()


def map_downloads(downloads: Iterable[ZebedeeDownload], version_uri: str) -> List[DatasetDownload]:
    """Map a Zebedee version's downloads to dataset page downloads."""
    return [
        DatasetDownload(
            extension=posixpath.splitext(download.file)[1],
            size=download.size,
            uri=f"{version_uri}/{download.file}",
        )
        for download in downloads
    ]


def create_dataset_page(base_page: Page, dataset: ZebedeeDataset, landing_page: ZebedeeDatasetLandingPage,
                        breadcrumbs: Iterable[TaxonomyNode],
                        versions: Iterable[ZebedeeDataset]) -> DatasetPage:
    """Create a legacy dataset page from Zebedee content.

    Args:
        base_page: Page built by ``build_base_page``
        dataset: The dataset (edition) being viewed
        landing_page: The landing page the dataset belongs to
        breadcrumbs: Taxonomy nodes above the landing page
        versions: Stored previous versions, looked up by URI for their downloads

    Returns:
        Dataset page with previous versions newest first
    """
    versions = list(versions)
    description = landing_page.description
    edition = dataset.description.edition

    trail = map_breadcrumbs(breadcrumbs)
    trail.append(Breadcrumb(title=edition))

    page = base_page.model_copy(update={
        "type": "dataset",
        "uri": dataset.uri,
        "breadcrumb": trail,
        **_with_metadata(base_page, title=description.title, description=description.summary),
    })

    downloads = [
        DatasetDownload(
            extension=posixpath.splitext(download.file)[1],
            size=download.size,
            uri=f"{dataset.uri}/{download.file}",
            file=download.file,
        )
        for download in dataset.downloads
    ]
    supplementary_files = [
        SupplementaryFile(
            title=supplementary.title,
            extension=posixpath.splitext(supplementary.file)[1],
            size=supplementary.size,
            uri=f"{dataset.uri}/{supplementary.file}",
        )
        for supplementary in dataset.supplementary_files
    ]
    previous_versions = [
        PreviousVersion(
            uri=ver.uri,
            update_date=ver.release_date,
            correction_notice=ver.notice,
            label=ver.label,
            downloads=map_downloads(_find_version(versions, ver.uri).downloads, ver.uri),
        )
        for ver in reversed(dataset.versions)
    ]
    logger.debug(f"Mapped dataset page {dataset.uri} with {len(previous_versions)} previous versions")

    feature_flags = base_page.feature_flags
    return DatasetPage(
        page=page,
        data=DatasetDetails(
            uri=landing_page.uri,
            release_date=description.release_date,
            next_release=description.next_release,
            dataset_id=description.dataset_id,
            is_national_statistic=description.national_statistic,
            edition=edition,
            markdown=landing_page.section.markdown,
            downloads=downloads,
            supplementary_files=supplementary_files,
            versions=previous_versions,
            enable_feedback_api=feature_flags.enable_feedback_api,
            feedback_api_url=feature_flags.feedback_api_url,
        ),
        contact=description.contact,
    )


def create_feedback_page(base_page: Page, service: str, url: str, error_type: str = "",
                         form: Optional[FeedbackForm] = None) -> FeedbackPage:
    """Create the feedback page, optionally re-displaying a rejected form.

    Args:
        base_page: Page built by ``build_base_page``
        service: Key of the service the feedback is about (``cmd`` or ``dev``)
        url: The page the user came from
        error_type: Field that failed validation, if any
        form: Previously submitted form values

    Raises:
        UnknownServiceError: If the service key is not recognised
    """
    service_description = FEEDBACK_SERVICES.get(service)
    if not service_description:
        raise UnknownServiceError(f"Unknown feedback service: {service!r}")

    form = form or FeedbackForm()
    page = base_page.model_copy(update=_with_metadata(
        base_page,
        title="Feedback",
        description=url[-FEEDBACK_DESCRIPTION_LENGTH:],
    ))
    return FeedbackPage(
        page=page,
        service_description=service_description,
        error_type=error_type,
        purpose=form.purpose,
        feedback=form.description,
        name=form.name,
        email=form.email,
        previous_url=url,
    )
