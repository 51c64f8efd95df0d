"""The table field as seen by the host platform.

``TableMakerField`` binds one field instance (its handle and settings record)
to the host's translator, template renderer, asset registrar and (optionally)
input namespacer, and exposes the lifecycle calls the host makes: normalize
on read, serialize before save, and render the settings and input HTML.
"""

import html
import logging
from collections.abc import Mapping
from typing import Any

from tablemaker.host import AssetRegistrar, Namespacer, TemplateRenderer, Translator, identity_translator
from tablemaker.normalizer import decode, normalize, serialize
from tablemaker.schema import FieldSettings, TableValue
from tablemaker.settings_schema import (
    build_settings_payload,
    column_settings,
    dropdown_settings_config,
    editor_inputs,
    editor_label,
)

logger = logging.getLogger(__name__)

# Front-end bundles registered while rendering the input
FIELD_ASSET_BUNDLE = "tablemaker/field"
TABLE_SETTINGS_ASSET_BUNDLE = "tablesettings"

SETTINGS_TEMPLATE = "tablemaker/_components/fields/_settings"

# Storage column type requested from the host's content table
CONTENT_COLUMN_TYPE = "text"


class TableMakerField:
    """A user-definable table field."""

    def __init__(
        self,
        handle: str,
        settings: FieldSettings | Mapping[str, Any] | None = None,
        translator: Translator = identity_translator,
        renderer: TemplateRenderer | None = None,
        assets: AssetRegistrar | None = None,
        namespacer: Namespacer | None = None,
    ):
        self.handle = handle
        if settings is None:
            settings = FieldSettings()
        elif not isinstance(settings, FieldSettings):
            settings = FieldSettings.model_validate(settings)
        self.settings = settings
        self.translator = translator
        self.renderer = renderer
        self.assets = assets
        self.namespacer = namespacer

    @staticmethod
    def display_name(translator: Translator = identity_translator) -> str:
        return translator("tablemaker", "Table Maker")

    @staticmethod
    def content_column_type() -> str:
        return CONTENT_COLUMN_TYPE

    # ─── Value Lifecycle ──────────────────────────────────────────────────────

    def normalize_value(self, value: Any) -> TableValue:
        """Normalize the raw field value for use (see ``normalizer.normalize``)."""
        return normalize(value)

    def serialize_value(self, value: Any) -> dict[str, Any] | None:
        """Prepare the field value for storage (see ``normalizer.serialize``)."""
        return serialize(value)

    # ─── HTML ─────────────────────────────────────────────────────────────────

    def _require_renderer(self) -> TemplateRenderer:
        if self.renderer is None:
            raise RuntimeError(f"Field '{self.handle}' has no template renderer")
        return self.renderer

    def get_settings_html(self) -> str:
        """Render the field settings form."""
        return self._require_renderer().render_template(SETTINGS_TEMPLATE, {"field": self})

    def get_input_html(self, value: Any) -> str:
        """Render the columns editor and the rows editor for ``value``.

        ``value`` is the normalized value, raw posted data (after a
        validation error), or None for a new element.
        """
        renderer = self._require_renderer()
        t = self.translator
        value = decode(value)

        if self.assets is not None:
            self.assets.register_asset_bundle(FIELD_ASSET_BUNDLE)

        dropdown_html = renderer.editable_table_field(dropdown_settings_config(t))
        payload = build_settings_payload(
            self.handle, value, t, dropdown_settings_html=dropdown_html, namespacer=self.namespacer
        )
        columns_id, rows_id, columns_name, rows_name = editor_inputs(self.handle)

        if self.assets is not None:
            self.assets.register_asset_bundle(TABLE_SETTINGS_ASSET_BUNDLE)
            self.assets.register_js(payload.init_js())
        else:
            logger.debug("No asset registrar for %s; widget init script not registered", self.handle)

        hidden_input = f'<input class="table-maker-field" type="hidden" name="{html.escape(self.handle)}" value="">'

        columns_field = renderer.editable_table_field(
            {
                "label": editor_label(self.settings, "columns_label", t),
                "instructions": editor_label(self.settings, "columns_instructions", t),
                "id": columns_id,
                "name": columns_name,
                "cols": column_settings(t),
                "rows": payload.columns,
                "addRowLabel": editor_label(self.settings, "columns_add_row_label", t),
                "initJs": False,
            }
        )

        rows_field = renderer.editable_table_field(
            {
                "label": editor_label(self.settings, "rows_label", t),
                "instructions": editor_label(self.settings, "rows_instructions", t),
                "id": rows_id,
                "name": rows_name,
                "cols": payload.columns,
                "rows": payload.rows,
                "addRowLabel": editor_label(self.settings, "rows_add_row_label", t),
                "initJs": False,
            }
        )

        return hidden_input + columns_field + rows_field
