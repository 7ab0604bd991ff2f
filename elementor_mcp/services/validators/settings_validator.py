"""
Widget settings key validation.

A shape check only: every key must be a property of the widget's generated
schema. Values are not type checked.
"""

from typing import Any

from elementor_mcp.core.exceptions import InvalidInputError
from elementor_mcp.services.schemas.schema_generator import SchemaGenerator


class SettingsValidator:
    def __init__(self, schema_generator: SchemaGenerator):
        self.schema_generator = schema_generator

    def validate(self, widget_type: str, settings: dict[str, Any] | None) -> None:
        """
        Raise on the first key the widget does not declare.

        Raises:
            InvalidInputError: With ``field`` set to the offending key
            NotFoundError: If the widget type is unknown
        """
        properties = self.schema_generator.generate(widget_type)["properties"]
        for key in settings or {}:
            if key not in properties:
                raise InvalidInputError(
                    f'Setting "{key}" is not a valid control for widget type "{widget_type}".',
                    field=key,
                )
