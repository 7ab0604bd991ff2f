"""
Editor backend wiring.

Bundles the external collaborators (document store, widget registry, global
token store, media library, image search) with the schema and validation
layers derived from them.
"""

import logging
from dataclasses import dataclass, field
from functools import lru_cache

import httpx

from elementor_mcp.config import Settings, get_settings
from elementor_mcp.services.document_store import (
    DocumentStore,
    InMemoryDocumentStore,
    JsonFileDocumentStore,
)
from elementor_mcp.services.global_tokens import GlobalTokenStore, InMemoryGlobalTokenStore
from elementor_mcp.services.media_library import (
    InMemoryMediaLibrary,
    LocalMediaLibrary,
    MediaLibrary,
)
from elementor_mcp.services.openverse_client import OpenverseClient
from elementor_mcp.services.schemas.schema_generator import SchemaGenerator
from elementor_mcp.services.validators.settings_validator import SettingsValidator
from elementor_mcp.services.widget_registry import WidgetRegistry, load_widget_registry

logger = logging.getLogger(__name__)


@dataclass
class EditorBackend:
    """Collaborators shared by every editor operation."""

    documents: DocumentStore
    widgets: WidgetRegistry
    tokens: GlobalTokenStore
    strict_structure: bool = False

    media: MediaLibrary = field(default_factory=InMemoryMediaLibrary)
    images: OpenverseClient = field(default_factory=OpenverseClient)
    # Used for media downloads; None means the default network transport
    http_transport: httpx.AsyncBaseTransport | None = None
    download_timeout: float = 30.0

    schema_generator: SchemaGenerator = field(init=False)
    validator: SettingsValidator = field(init=False)

    def __post_init__(self) -> None:
        self.schema_generator = SchemaGenerator(self.widgets)
        self.validator = SettingsValidator(self.schema_generator)


def create_backend(settings: Settings) -> EditorBackend:
    """Build a backend from configuration."""
    storage_dir = settings.storage_dir
    if storage_dir:
        documents: DocumentStore = JsonFileDocumentStore(storage_dir)
        logger.info(f"Using JSON document store at {storage_dir}")
    else:
        documents = InMemoryDocumentStore()
        logger.info("Using in-memory document store")

    media_dir = settings.media_dir
    if media_dir:
        media: MediaLibrary = LocalMediaLibrary(media_dir, settings.media_base_url)
        logger.info(f"Using media library at {media_dir}")
    else:
        media = InMemoryMediaLibrary()

    return EditorBackend(
        documents=documents,
        widgets=load_widget_registry(settings.widget_registry_path or None),
        tokens=InMemoryGlobalTokenStore(),
        strict_structure=settings.strict_structure,
        media=media,
        images=OpenverseClient(settings.openverse_api_url, timeout=settings.openverse_timeout),
        download_timeout=settings.download_timeout,
    )


@lru_cache
def get_default_backend() -> EditorBackend:
    """Process-wide backend built from the cached settings."""
    return create_backend(get_settings())
