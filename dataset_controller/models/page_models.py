"""
Base page models.

This module contains the shared ``Page`` record reused by every rendered page
and the containers that compose it with page-specific payloads. A page variant
holds the base page as a named field and flattens it into the top level of
the serialized payload, so the wire layout matches the one the renderer
expects.
"""

from typing import Any, ClassVar, Dict, Generic, List, Set, Tuple, Type, TypeVar

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    SerializerFunctionWrapHandler,
    ValidationError,
    model_serializer,
    model_validator,
)


class ViewModel(BaseModel):
    """Immutable record with fixed JSON keys."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-compatible dictionary keyed by wire names."""
        return self.model_dump(mode="json", by_alias=True)

    def to_json(self) -> str:
        """Serialize to a compact JSON string keyed by wire names."""
        return self.model_dump_json(by_alias=True)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]):
        """Build a record from a decoded JSON payload."""
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise ValueError(f"Invalid {cls.__name__} payload: {e}") from e

    @classmethod
    def from_json(cls, json_str: str):
        """Build a record from a JSON string."""
        try:
            return cls.model_validate_json(json_str)
        except ValidationError as e:
            raise ValueError(f"Invalid {cls.__name__} payload: {e}") from e


def input_keys(model_cls: Type[BaseModel]) -> Set[str]:
    """Return every key a model accepts on input: field names and aliases."""
    keys: Set[str] = set()
    for name, field in model_cls.model_fields.items():
        keys.add(name)
        if field.alias:
            keys.add(field.alias)
    return keys


class Breadcrumb(ViewModel):
    """A navigation link shown in the page taxonomy or breadcrumb trail."""
    title: str = ""
    uri: str = ""


class Metadata(ViewModel):
    """Page metadata used for the document head."""
    title: str = ""
    description: str = ""
    service_name: str = Field(default="", alias="serviceName")
    keywords: List[str] = Field(default_factory=list)


class CookiesPolicy(ViewModel):
    """The user's cookie policy choices."""
    essential: bool = False
    usage: bool = False


class FeatureFlags(ViewModel):
    """Feature toggles passed through to templates."""
    enable_feedback_api: bool = False
    feedback_api_url: str = ""


class ErrorItem(ViewModel):
    description: str = ""
    url: str = ""


class PageError(ViewModel):
    """Validation error summary displayed at the top of a page."""
    title: str = ""
    error_items: List[ErrorItem] = Field(default_factory=list)
    language: str = ""


class Page(ViewModel):
    """Data re-used for each page type.

    ``site_domain``, ``pattern_library_assets_path`` and
    ``include_assets_integrity_attributes`` are server-side settings and are
    never serialized.
    """
    type: str = ""
    dataset_id: str = ""
    dataset_title: str = ""
    uri: str = ""
    taxonomy: List[Breadcrumb] = Field(default_factory=list)
    breadcrumb: List[Breadcrumb] = Field(default_factory=list)
    is_in_filter_breadcrumb: bool = False
    service_message: str = ""
    metadata: Metadata = Field(default_factory=Metadata)
    search_disabled: bool = False
    site_domain: str = Field(default="", exclude=True)
    pattern_library_assets_path: str = Field(default="", exclude=True)
    language: str = ""
    include_assets_integrity_attributes: bool = Field(default=False, exclude=True)
    show_feedback_form: bool = False
    release_date: str = ""
    beta_banner_enabled: bool = False
    enable_loop11: bool = False
    cookies_preferences_set: bool = False
    cookies_policy: CookiesPolicy = Field(default_factory=CookiesPolicy)
    feature_flags: FeatureFlags = Field(default_factory=FeatureFlags)
    error: PageError = Field(default_factory=PageError)


class EmbeddedPage(ViewModel):
    """A page variant that flattens embedded records into its payload.

    ``embedded_fields`` names the fields whose keys are merged into the top
    level. On a key collision the variant's own fields win, then the embedded
    records in declaration order. When parsing, a shared key is given to every
    embedded record that accepts it.
    """

    embedded_fields: ClassVar[Tuple[str, ...]] = ("page",)

    page: Page = Field(default_factory=Page)

    @model_validator(mode="before")
    @classmethod
    def _collect_embedded(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)
        own_keys = input_keys(cls) - set(cls.embedded_fields)
        parts: Dict[str, Dict[str, Any]] = {}
        for name in cls.embedded_fields:
            if name in data:
                continue
            embedded_keys = input_keys(cls.model_fields[name].annotation)
            # Shared keys go to every embedded record that accepts them
            parts[name] = {
                key: value
                for key, value in data.items()
                if key in embedded_keys and key not in own_keys
            }
        for part in parts.values():
            for key in part:
                data.pop(key, None)
        data.update(parts)
        return data

    @model_serializer(mode="wrap")
    def _flatten_embedded(self, handler: SerializerFunctionWrapHandler) -> Dict[str, Any]:
        payload = handler(self)
        embedded = [payload.pop(name, {}) for name in self.embedded_fields]
        flattened: Dict[str, Any] = {}
        for part in embedded:
            for key, value in part.items():
                if key not in payload:
                    flattened.setdefault(key, value)
        flattened.update(payload)
        return flattened


DataT = TypeVar("DataT", bound=BaseModel)


class DataPage(EmbeddedPage, Generic[DataT]):
    """Base page plus a typed ``data`` payload."""

    data: DataT

    @model_validator(mode="before")
    @classmethod
    def _default_data(cls, data: Any) -> Any:
        # All payload records are fully defaulted, so an absent key means an empty payload
        if isinstance(data, dict) and "data" not in data:
            data = {**data, "data": {}}
        return data
