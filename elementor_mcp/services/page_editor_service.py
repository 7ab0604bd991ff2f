"""
Page Editor Service

Document-level operations built on the element tree, factory, validator and
structure compiler. Every mutation is one read-modify-write cycle:

1. Validate caller input (nothing is loaded or written on failure)
2. Load the document tree from the store
3. Mutate the in-memory copy
4. Save the whole tree back

Failures raise the typed errors from ``elementor_mcp.core.exceptions``;
a failed step aborts the operation before anything is saved.
"""

import copy
import json
import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from elementor_mcp.core.exceptions import (
    ElementorMCPError,
    InvalidInputError,
    MalformedElementError,
    NotFoundError,
    StructuralConflictError,
    UpstreamFailureError,
)
from elementor_mcp.models.contracts.elements import (
    Element,
    elements_from_data,
    elements_to_data,
)
from elementor_mcp.services.backend import EditorBackend
from elementor_mcp.services.element_factory import create_container, create_widget
from elementor_mcp.services.element_tree import (
    collect_ids,
    contains_element,
    count_elements,
    find_element,
    insert_after,
    insert_element,
    insert_elements,
    reassign_element_ids,
    reassign_ids,
    remove_element,
    update_element_settings,
)
from elementor_mcp.services.structure_compiler import StructureCompiler

logger = logging.getLogger(__name__)

TEMPLATE_KIND = "template"

PAGE_KINDS = ["page", "post"]

SUMMARY_SETTING_KEYS = ("title", "editor", "text", "image", "link", "html", "header_size")

CONTAINER_SUMMARY_KEYS = ("flex_direction", "content_width", "container_type")

SUMMARY_MAX_LENGTH = 100


@contextmanager
def collaborator_errors(action: str) -> Iterator[None]:
    """Turn unexpected collaborator exceptions into UpstreamFailureError."""
    try:
        yield
    except (ElementorMCPError, MalformedElementError):
        raise
    except Exception as e:
        logger.exception(f"Collaborator failed to {action}")
        raise UpstreamFailureError(f"Failed to {action}: {e}") from e


def _require(value: Any, field: str) -> None:
    if not value:
        raise InvalidInputError(f"The {field} parameter is required.", field=field)


def _parse_elements(data: Any, field: str) -> list[Element]:
    """Parse caller-supplied element JSON; bad shapes are caller errors."""
    if isinstance(data, str):
        try:
            data = json.loads(data)
        except json.JSONDecodeError as e:
            raise InvalidInputError(f"{field} is not valid JSON: {e}", field=field) from e
    # Elementor export files wrap the tree: {"content": [...], "page_settings": ...}
    if isinstance(data, dict) and "content" in data:
        data = data["content"]
    try:
        return elements_from_data(data)
    except MalformedElementError as e:
        raise InvalidInputError(f"{field} is not a valid element tree: {e}", field=field) from e


def _summarize_value(value: Any) -> Any:
    if isinstance(value, str) and len(value) > SUMMARY_MAX_LENGTH:
        return value[:SUMMARY_MAX_LENGTH] + "..."
    return value


def summarize_tree(elements: list[Element]) -> list[dict[str, Any]]:
    """Simplified view of a tree: ids, kinds and a few key settings."""
    summary: list[dict[str, Any]] = []
    for element in elements:
        node: dict[str, Any] = {"id": element.id, "elType": element.kind}
        if element.widget_type:
            node["widgetType"] = element.widget_type

        keys = SUMMARY_SETTING_KEYS
        if element.kind == "container":
            keys = keys + CONTAINER_SUMMARY_KEYS
        settings_summary = {
            key: _summarize_value(element.settings[key])
            for key in keys
            if key in element.settings
        }
        if settings_summary:
            node["settings_summary"] = settings_summary

        if element.children:
            node["elements"] = summarize_tree(element.children)
        summary.append(node)
    return summary


class PageEditorService:
    """Operations on one document's element tree."""

    def __init__(self, backend: EditorBackend):
        self.backend = backend
        self.documents = backend.documents

    # =========================================================================
    # Store access
    # =========================================================================

    async def _load_tree(self, post_id: int) -> list[Element]:
        with collaborator_errors(f"load document {post_id}"):
            data = await self.documents.load_tree(post_id)
        return elements_from_data(data)

    async def _save_tree(self, post_id: int, elements: list[Element]) -> None:
        with collaborator_errors(f"save document {post_id}"):
            await self.documents.save_tree(post_id, elements_to_data(elements))

    def _ensure_parent(self, elements: list[Element], parent_id: str | None) -> None:
        """A non-empty parent id must resolve to a node that can hold children."""
        if not parent_id:
            return
        parent = find_element(elements, parent_id)
        if parent is None:
            raise StructuralConflictError(f"Parent element not found: {parent_id}")
        if parent.kind == "widget":
            raise StructuralConflictError(
                f"Element {parent_id} is a widget and cannot contain children"
            )

    def _ensure_widget_type(self, widget_type: str) -> None:
        with collaborator_errors("read the widget registry"):
            types = self.backend.widgets.list_types()
        if widget_type not in types:
            raise NotFoundError(f"Widget type '{widget_type}' not found")

    # =========================================================================
    # Documents
    # =========================================================================

    async def create_document(
        self,
        title: str,
        status: str = "draft",
        post_type: str = "page",
        content: Any = None,
    ) -> dict[str, Any]:
        _require(title, "title")
        elements = _parse_elements(content, "content") if content else []

        with collaborator_errors("create document"):
            post_id = await self.documents.create_document(
                title=title, status=status or "draft", kind=post_type or "page"
            )
        await self._save_tree(post_id, elements)

        logger.info(f"Created document {post_id} '{title}' with {count_elements(elements)} elements")
        return {
            "post_id": post_id,
            "title": title,
            "status": status or "draft",
            "post_type": post_type or "page",
        }

    async def update_document_settings(
        self, post_id: int, settings: dict[str, Any]
    ) -> dict[str, Any]:
        """Shallow-merge document-level settings."""
        _require(post_id, "post_id")
        _require(settings, "settings")

        with collaborator_errors(f"load settings of document {post_id}"):
            current = await self.documents.load_settings(post_id)
        merged = {**current, **copy.deepcopy(settings)}
        with collaborator_errors(f"save settings of document {post_id}"):
            await self.documents.save_settings(post_id, merged)

        return {"post_id": post_id, "updated_keys": list(settings)}

    async def clear_document_content(self, post_id: int) -> dict[str, Any]:
        _require(post_id, "post_id")
        with collaborator_errors(f"load document {post_id}"):
            await self.documents.get_document(post_id)
        await self._save_tree(post_id, [])
        logger.info(f"Cleared content of document {post_id}")
        return {"post_id": post_id, "success": True}

    async def import_structure_into_document(
        self,
        post_id: int,
        template_json: Any,
        position: int = -1,
    ) -> dict[str, Any]:
        """Splice an element tree into the document root with fresh ids."""
        _require(post_id, "post_id")
        _require(template_json, "template_json")
        imported = _parse_elements(template_json, "template_json")
        if not imported:
            raise InvalidInputError("template_json contains no elements", field="template_json")

        elements = await self._load_tree(post_id)
        fresh = reassign_ids(imported, reserved=collect_ids(elements))
        insert_elements(elements, None, fresh, position)
        await self._save_tree(post_id, elements)

        imported_count = count_elements(fresh)
        logger.info(f"Imported {imported_count} elements into document {post_id}")
        return {"post_id": post_id, "elements_count": imported_count}

    async def export_document(self, post_id: int) -> dict[str, Any]:
        _require(post_id, "post_id")
        with collaborator_errors(f"export document {post_id}"):
            info = await self.documents.get_document(post_id)
            page_settings = await self.documents.load_settings(post_id)
        elements = await self._load_tree(post_id)
        return {
            "post_id": post_id,
            "title": info.title,
            "content": elements_to_data(elements),
            "page_settings": page_settings,
        }

    # =========================================================================
    # Layout
    # =========================================================================

    async def add_container(
        self,
        post_id: int,
        settings: dict[str, Any] | None = None,
        parent_id: str | None = None,
        position: int = -1,
    ) -> dict[str, Any]:
        _require(post_id, "post_id")

        elements = await self._load_tree(post_id)
        self._ensure_parent(elements, parent_id)

        container = create_container(settings)
        if parent_id:
            container.is_inner = True
        if not insert_element(elements, parent_id, container, position):
            raise StructuralConflictError(f"Parent element not found: {parent_id}")
        await self._save_tree(post_id, elements)

        logger.info(f"Added container {container.id} to document {post_id}")
        return {"post_id": post_id, "element_id": container.id}

    async def move_element(
        self,
        post_id: int,
        element_id: str,
        target_parent_id: str | None = None,
        position: int = -1,
    ) -> dict[str, Any]:
        _require(post_id, "post_id")
        _require(element_id, "element_id")

        elements = await self._load_tree(post_id)
        element = find_element(elements, element_id)
        if element is None:
            raise NotFoundError(f"Element not found: {element_id}")
        if target_parent_id and contains_element(element, target_parent_id):
            raise StructuralConflictError(
                f"Cannot move element {element_id} under itself or its own descendant"
            )
        self._ensure_parent(elements, target_parent_id)

        remove_element(elements, element_id)
        if not insert_element(elements, target_parent_id, element, position):
            raise StructuralConflictError(f"Parent element not found: {target_parent_id}")
        await self._save_tree(post_id, elements)

        logger.info(f"Moved element {element_id} to parent={target_parent_id or 'root'} position={position}")
        return {
            "post_id": post_id,
            "element_id": element_id,
            "target_parent_id": target_parent_id or None,
            "position": position,
        }

    async def remove_element(self, post_id: int, element_id: str) -> dict[str, Any]:
        _require(post_id, "post_id")
        _require(element_id, "element_id")

        elements = await self._load_tree(post_id)
        element = find_element(elements, element_id)
        if element is None:
            raise NotFoundError(f"Element not found: {element_id}")
        removed_count = count_elements([element])
        remove_element(elements, element_id)
        await self._save_tree(post_id, elements)

        logger.info(f"Removed element {element_id} ({removed_count} nodes) from document {post_id}")
        return {"post_id": post_id, "element_id": element_id, "removed_count": removed_count}

    async def duplicate_element(self, post_id: int, element_id: str) -> dict[str, Any]:
        """Insert a fresh-id deep copy right after the original."""
        _require(post_id, "post_id")
        _require(element_id, "element_id")

        elements = await self._load_tree(post_id)
        element = find_element(elements, element_id)
        if element is None:
            raise NotFoundError(f"Element not found: {element_id}")

        duplicate = reassign_element_ids(element, reserved=collect_ids(elements))
        if not insert_after(elements, element_id, duplicate):
            raise StructuralConflictError(f"Cannot place duplicate after element {element_id}")
        await self._save_tree(post_id, elements)

        logger.info(f"Duplicated element {element_id} as {duplicate.id} in document {post_id}")
        return {"post_id": post_id, "element_id": element_id, "new_element_id": duplicate.id}

    # =========================================================================
    # Widgets
    # =========================================================================

    async def add_widget(
        self,
        post_id: int,
        parent_id: str,
        widget_type: str,
        settings: dict[str, Any] | None = None,
        position: int = -1,
    ) -> dict[str, Any]:
        _require(post_id, "post_id")
        _require(parent_id, "parent_id")
        _require(widget_type, "widget_type")
        self._ensure_widget_type(widget_type)
        self.backend.validator.validate(widget_type, settings)

        elements = await self._load_tree(post_id)
        self._ensure_parent(elements, parent_id)

        widget = create_widget(widget_type, copy.deepcopy(settings or {}))
        if not insert_element(elements, parent_id, widget, position):
            raise StructuralConflictError(f"Parent element not found: {parent_id}")
        await self._save_tree(post_id, elements)

        logger.info(f"Added {widget_type} widget {widget.id} under {parent_id} in document {post_id}")
        return {"post_id": post_id, "element_id": widget.id, "widget_type": widget_type}

    async def update_widget(
        self,
        post_id: int,
        element_id: str,
        settings: dict[str, Any],
    ) -> dict[str, Any]:
        """Validate against the node's own widget type, then shallow-merge."""
        _require(post_id, "post_id")
        _require(element_id, "element_id")
        _require(settings, "settings")

        elements = await self._load_tree(post_id)
        element = find_element(elements, element_id)
        if element is None:
            raise NotFoundError(f"Element not found: {element_id}")
        if element.kind != "widget" or not element.widget_type:
            raise StructuralConflictError(f"Element {element_id} is not a widget")
        self.backend.validator.validate(element.widget_type, settings)

        update_element_settings(elements, element_id, settings)
        await self._save_tree(post_id, elements)

        return {"post_id": post_id, "element_id": element_id, "updated_keys": list(settings)}

    # =========================================================================
    # Templates
    # =========================================================================

    async def save_as_template(
        self,
        post_id: int,
        title: str,
        element_id: str | None = None,
        template_type: str = "page",
    ) -> dict[str, Any]:
        """Store the whole tree, or one element's subtree, as a template document."""
        _require(post_id, "post_id")
        _require(title, "title")

        elements = await self._load_tree(post_id)
        if element_id:
            element = find_element(elements, element_id)
            if element is None:
                raise NotFoundError(f"Element not found: {element_id}")
            content = [element.model_copy(deep=True)]
        else:
            content = elements
        if not content:
            raise InvalidInputError(f"Document {post_id} has no content to save", field="post_id")

        with collaborator_errors("create template"):
            template_id = await self.documents.create_document(
                title=title,
                status="publish",
                kind=TEMPLATE_KIND,
                template_type=template_type or "page",
            )
        await self._save_tree(template_id, content)

        logger.info(f"Saved template {template_id} '{title}' from document {post_id}")
        return {
            "template_id": template_id,
            "title": title,
            "template_type": template_type or "page",
            "elements_count": count_elements(content),
        }

    async def apply_template(
        self,
        post_id: int,
        template_id: int,
        parent_id: str | None = None,
        position: int = -1,
    ) -> dict[str, Any]:
        _require(post_id, "post_id")
        _require(template_id, "template_id")

        try:
            template_elements = await self._load_tree(template_id)
        except NotFoundError as e:
            raise NotFoundError(f"Template not found: {template_id}") from e
        if not template_elements:
            raise InvalidInputError(f"Template {template_id} is empty", field="template_id")

        elements = await self._load_tree(post_id)
        self._ensure_parent(elements, parent_id)

        fresh = reassign_ids(template_elements, reserved=collect_ids(elements))
        if not insert_elements(elements, parent_id, fresh, position):
            raise StructuralConflictError(f"Parent element not found: {parent_id}")
        await self._save_tree(post_id, elements)

        logger.info(f"Applied template {template_id} to document {post_id}")
        return {
            "post_id": post_id,
            "template_id": template_id,
            "element_ids": [element.id for element in fresh],
            "elements_count": count_elements(fresh),
        }

    # =========================================================================
    # Composite
    # =========================================================================

    async def build_page(
        self,
        title: str,
        structure: list[Any],
        status: str = "draft",
        post_type: str = "page",
        page_settings: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Create a document and materialize a declarative structure into it."""
        _require(title, "title")
        _require(structure, "structure")
        if not isinstance(structure, list):
            raise InvalidInputError("structure must be a list of items", field="structure")

        compiler = StructureCompiler(strict=self.backend.strict_structure)
        elements = compiler.build(structure)

        with collaborator_errors("create document"):
            post_id = await self.documents.create_document(
                title=title, status=status or "draft", kind=post_type or "page"
            )
        await self._save_tree(post_id, elements)
        if page_settings:
            with collaborator_errors(f"save settings of document {post_id}"):
                await self.documents.save_settings(post_id, copy.deepcopy(page_settings))

        logger.info(f"Built page {post_id} '{title}' with {compiler.elements_created} elements")
        return {
            "post_id": post_id,
            "title": title,
            "elements_created": compiler.elements_created,
        }

    # =========================================================================
    # Queries
    # =========================================================================

    def list_widgets(self, category: str | None = None) -> list[dict[str, Any]]:
        with collaborator_errors("read the widget registry"):
            types = self.backend.widgets.list_types()
        return [
            info.model_dump()
            for info in types.values()
            if not category or category in info.categories
        ]

    def get_widget_schema(self, widget_type: str) -> dict[str, Any]:
        _require(widget_type, "widget_type")
        schema = self.backend.schema_generator.generate(widget_type)
        types = self.backend.widgets.list_types()
        return {
            "widget_type": widget_type,
            "title": types[widget_type].title,
            "schema": copy.deepcopy(schema),
        }

    async def get_page_structure(self, post_id: int) -> dict[str, Any]:
        _require(post_id, "post_id")
        with collaborator_errors(f"load document {post_id}"):
            info = await self.documents.get_document(post_id)
        elements = await self._load_tree(post_id)
        return {
            "post_id": post_id,
            "title": info.title,
            "elements_count": count_elements(elements),
            "elements": summarize_tree(elements),
        }

    async def get_element_settings(self, post_id: int, element_id: str) -> dict[str, Any]:
        _require(post_id, "post_id")
        _require(element_id, "element_id")

        elements = await self._load_tree(post_id)
        element = find_element(elements, element_id)
        if element is None:
            raise NotFoundError(f"Element not found: {element_id}")
        return {
            "element_id": element.id,
            "elType": element.kind,
            "widgetType": element.widget_type,
            "settings": copy.deepcopy(element.settings),
        }

    async def list_pages(
        self,
        post_type: str | None = None,
        status: str | None = None,
    ) -> list[dict[str, Any]]:
        kinds = [post_type] if post_type else PAGE_KINDS
        with collaborator_errors("list documents"):
            documents = await self.documents.list_documents(kinds=kinds, status=status)
        return [
            {
                "post_id": info.id,
                "title": info.title,
                "type": info.kind,
                "status": info.status,
                "modified": info.modified_at.isoformat(),
            }
            for info in documents
        ]

    async def list_templates(self, template_type: str | None = None) -> list[dict[str, Any]]:
        with collaborator_errors("list templates"):
            documents = await self.documents.list_documents(kinds=[TEMPLATE_KIND])
        return [
            {
                "id": info.id,
                "title": info.title,
                "type": info.template_type,
                "date": info.created_at.isoformat(),
            }
            for info in documents
            if not template_type or info.template_type == template_type
        ]
