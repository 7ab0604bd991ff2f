"""
Element Tree Operations

Generic recursive operations over a document's root element sequence:
- Find, insert, remove and update nodes by id (depth-first, no parent pointers)
- Deep copy with fresh ids for duplicate/import/template flows
- Deep counting and iteration

All functions take the whole root sequence. Ordinary absence is reported
through a False/None return; a node that is not an Element raises
MalformedElementError since it means the tree was corrupted upstream.
"""

import copy
import logging
from collections.abc import Iterator
from typing import Any

from elementor_mcp.core.exceptions import MalformedElementError
from elementor_mcp.models.contracts.elements import Element
from elementor_mcp.services.id_generator import generate_element_id

logger = logging.getLogger(__name__)


def _check(element: Any) -> Element:
    if not isinstance(element, Element):
        raise MalformedElementError(
            f"Expected Element in tree, got {type(element).__name__}"
        )
    return element


# =============================================================================
# Lookup
# =============================================================================


def iter_elements(elements: list[Element]) -> Iterator[Element]:
    """Yield every node in depth-first (document) order."""
    for element in elements:
        _check(element)
        yield element
        yield from iter_elements(element.children)


def find_element(elements: list[Element], element_id: str) -> Element | None:
    """
    Depth-first search for a node by id.

    If ids are duplicated (which breaks the tree invariant) the first node
    in depth-first order is returned.
    """
    if not element_id:
        return None
    for element in iter_elements(elements):
        if element.id == element_id:
            return element
    return None


def locate_element(
    elements: list[Element], element_id: str
) -> tuple[list[Element], int] | None:
    """Return the sequence holding the node and its index in it."""
    for index, element in enumerate(elements):
        _check(element)
        if element.id == element_id:
            return elements, index
        found = locate_element(element.children, element_id)
        if found is not None:
            return found
    return None


def contains_element(element: Element, element_id: str) -> bool:
    """Whether ``element_id`` is the node itself or one of its descendants."""
    return element.id == element_id or find_element(element.children, element_id) is not None


def collect_ids(elements: list[Element]) -> set[str]:
    return {element.id for element in iter_elements(elements)}


def count_elements(elements: list[Element]) -> int:
    """Count every node, nested descendants included."""
    return sum(1 for _ in iter_elements(elements))


# =============================================================================
# Mutation
# =============================================================================


def _target_children(elements: list[Element], parent_id: str | None) -> list[Element] | None:
    if not parent_id:
        return elements
    parent = find_element(elements, parent_id)
    if parent is None:
        return None
    return parent.children


def _splice(target: list[Element], new_elements: list[Element], position: int) -> None:
    if position < 0 or position >= len(target):
        target.extend(new_elements)
    else:
        target[position:position] = new_elements


def insert_element(
    elements: list[Element],
    parent_id: str | None,
    element: Element,
    position: int = -1,
) -> bool:
    """
    Insert a node under ``parent_id`` (or at the root when empty).

    A negative or out-of-range position appends. Returns False, leaving the
    tree untouched, if the parent does not exist.
    """
    return insert_elements(elements, parent_id, [element], position)


def insert_elements(
    elements: list[Element],
    parent_id: str | None,
    new_elements: list[Element],
    position: int = -1,
) -> bool:
    """Insert several nodes at consecutive positions starting at ``position``."""
    for element in new_elements:
        _check(element)
    target = _target_children(elements, parent_id)
    if target is None:
        return False
    _splice(target, new_elements, position)
    return True


def insert_after(elements: list[Element], target_id: str, element: Element) -> bool:
    """Insert a node right after ``target_id`` in whichever sequence holds it."""
    _check(element)
    found = locate_element(elements, target_id)
    if found is None:
        return False
    sequence, index = found
    sequence.insert(index + 1, element)
    return True


def remove_element(elements: list[Element], element_id: str) -> bool:
    """Remove a node and its whole subtree."""
    found = locate_element(elements, element_id)
    if found is None:
        return False
    sequence, index = found
    del sequence[index]
    return True


def update_element_settings(
    elements: list[Element],
    element_id: str,
    settings: dict[str, Any],
) -> bool:
    """
    Shallow-merge ``settings`` into the node's settings.

    Top-level keys overwrite; nested values such as {size, unit} are replaced
    wholesale, never merged field by field.
    """
    element = find_element(elements, element_id)
    if element is None:
        return False
    element.settings = {**element.settings, **copy.deepcopy(settings)}
    return True


# =============================================================================
# Id reassignment
# =============================================================================


def _fresh_id(taken: set[str]) -> str:
    new_id = generate_element_id()
    while new_id in taken:
        logger.debug(f"Element id collision on {new_id}, regenerating")
        new_id = generate_element_id()
    taken.add(new_id)
    return new_id


def _reassign(element: Element, taken: set[str]) -> Element:
    clone = _check(element).model_copy(deep=True)
    clone.id = _fresh_id(taken)
    clone.children = [_reassign(child, taken) for child in element.children]
    return clone


def reassign_ids(
    elements: list[Element],
    reserved: set[str] | None = None,
) -> list[Element]:
    """
    Deep copy of a tree where every node has a fresh id.

    New ids never collide with the source ids, with each other, or with
    ``reserved`` (typically the destination tree's ids). The source is not
    modified.
    """
    taken = collect_ids(elements) | set(reserved or ())
    return [_reassign(element, taken) for element in elements]


def reassign_element_ids(element: Element, reserved: set[str] | None = None) -> Element:
    """Same as reassign_ids, rooted at a single node."""
    return reassign_ids([element], reserved)[0]
