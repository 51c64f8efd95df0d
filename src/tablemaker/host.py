"""Capabilities the host platform supplies to the table field.

The field never reaches for process-wide globals: translation, template
rendering, asset registration and input namespacing are passed in as objects
satisfying these protocols.  ``identity_translator`` is the fallback when no translation
catalogue is available.
"""

from typing import Any, Protocol


class Translator(Protocol):
    """Translate ``message`` within a message ``category`` ('app' or 'tablemaker')."""

    def __call__(self, category: str, message: str) -> str: ...


class TemplateRenderer(Protocol):
    """Template calls used to build the editing UI."""

    def editable_table_field(self, config: dict[str, Any]) -> str:
        """Render an editable grid widget from {label, instructions, id, name, cols, rows, addRowLabel, initJs}."""

    def render_template(self, template: str, variables: dict[str, Any]) -> str:
        """Render a named template with the given variables."""


class AssetRegistrar(Protocol):
    """Registers front-end bundles and inline scripts on the page being rendered."""

    def register_asset_bundle(self, name: str) -> None: ...

    def register_js(self, script: str) -> None: ...


class Namespacer(Protocol):
    """Prefixes input ids and names with the enclosing form's namespace."""

    def namespace_input_id(self, input_id: str) -> str: ...

    def namespace_input_name(self, input_name: str) -> str: ...


def identity_translator(category: str, message: str) -> str:  # pylint: disable=unused-argument
    """Return ``message`` untranslated."""
    return message
