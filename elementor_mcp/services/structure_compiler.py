"""
Structure Compiler

Materializes the declarative build_page structure into Elements:

    [{"type": "container", "settings": {"flex_direction": "row"},
      "children": [{"type": "widget", "widget_type": "heading", ...}, ...]}]

Siblings under a row-direction parent get an equal percentage width unless
they set their own width or flex size. flex_wrap and flex size keys belong
to the caller; the compiler never writes them.

Malformed items (unknown type, widget without a widget type, unparseable
item) are skipped by default. With ``strict=True`` they raise
InvalidInputError naming the item path instead.
"""

import copy
import logging
from typing import Any

from pydantic import ValidationError

from elementor_mcp.core.exceptions import InvalidInputError
from elementor_mcp.models.contracts.elements import Element, StructureItem
from elementor_mcp.services.element_factory import create_container, create_widget

logger = logging.getLogger(__name__)

ROW_DIRECTIONS = frozenset({"row", "row-reverse"})

# Any of these opts a row sibling out of the equal-width inference
SIZE_OVERRIDE_KEYS = frozenset({"width", "_flex_size", "_flex_grow"})

CALLER_OWNED_LAYOUT_KEYS = frozenset({"flex_wrap", "_flex_size", "_flex_grow"})


class StructureCompiler:
    """
    Compiles structure items into Elements, counting every node it creates.

    ``elements_created`` accumulates across the whole recursive compile;
    ``build`` resets it for a fresh top-level run.
    """

    def __init__(self, strict: bool = False):
        self.strict = strict
        self.elements_created = 0

    def build(self, structure: list[Any]) -> list[Element]:
        self.elements_created = 0
        return self.compile(structure)

    def compile(
        self,
        items: list[Any],
        is_inner: bool = False,
        parent_direction: str = "",
        path: str = "structure",
    ) -> list[Element]:
        if not isinstance(items, list):
            self._reject(path, "must be a list of structure items")
            return []

        equal_width: float | None = None
        if parent_direction in ROW_DIRECTIONS and len(items) > 1:
            equal_width = round(100 / len(items), 2)

        elements: list[Element] = []
        for index, raw_item in enumerate(items):
            item_path = f"{path}[{index}]"
            item = self._parse(raw_item, item_path)
            if item is None:
                continue

            settings = copy.deepcopy(item.settings)
            caller_owned = CALLER_OWNED_LAYOUT_KEYS & settings.keys()
            if caller_owned:
                logger.debug(f"{item_path} sets caller-owned layout keys: {sorted(caller_owned)}")

            if equal_width is not None and not SIZE_OVERRIDE_KEYS & settings.keys():
                settings["content_width"] = "full"
                settings["width"] = {"size": equal_width, "unit": "%"}

            if item.type == "container":
                direction = settings.get("flex_direction") or ""
                children = self.compile(
                    item.children,
                    is_inner=True,
                    parent_direction=str(direction),
                    path=f"{item_path}.children",
                )
                element = create_container(settings, children)
                element.is_inner = is_inner
            elif item.type == "widget":
                if not item.widget_type:
                    self._reject(item_path, "is a widget without a widget_type")
                    continue
                element = create_widget(item.widget_type, settings)
            else:
                self._reject(item_path, f"has unsupported type '{item.type}'")
                continue

            self.elements_created += 1
            elements.append(element)

        return elements

    def _parse(self, raw_item: Any, item_path: str) -> StructureItem | None:
        try:
            return StructureItem.model_validate(raw_item)
        except ValidationError as e:
            self._reject(item_path, f"is malformed: {e.errors()[0]['msg']}")
            return None

    def _reject(self, item_path: str, reason: str) -> None:
        if self.strict:
            raise InvalidInputError(f"Structure item {item_path} {reason}", field=item_path)
        logger.info(f"Skipping structure item {item_path}: {reason}")


def compile_structure(
    structure: list[Any], strict: bool = False
) -> tuple[list[Element], int]:
    """Compile a whole structure, returning the root elements and node count."""
    compiler = StructureCompiler(strict=strict)
    elements = compiler.build(structure)
    return elements, compiler.elements_created
