"""Shared test configuration and fixtures."""

# pylint: disable=missing-class-docstring,missing-function-docstring

from pathlib import Path

import pytest
from dotenv import load_dotenv

# Load .env from project root for all tests
root = Path(__file__).parent.parent.resolve()
load_dotenv(root / ".env")


class RecordingRenderer:
    """Template renderer that returns a marker string and records every call."""

    def __init__(self):
        self.table_configs: list[dict] = []
        self.templates: list[tuple[str, dict]] = []

    def editable_table_field(self, config: dict) -> str:
        self.table_configs.append(config)
        return f"<editable-table id=\"{config['id']}\">"

    def render_template(self, template: str, variables: dict) -> str:
        self.templates.append((template, variables))
        return f"<settings template=\"{template}\">"


class RecordingAssets:
    """Asset registrar that records bundles and scripts."""

    def __init__(self):
        self.bundles: list[str] = []
        self.scripts: list[str] = []

    def register_asset_bundle(self, name: str) -> None:
        self.bundles.append(name)

    def register_js(self, script: str) -> None:
        self.scripts.append(script)


class PrefixNamespacer:
    """Namespacer for a field rendered inside a 'fields' form namespace."""

    def namespace_input_id(self, input_id: str) -> str:
        return f"fields-{input_id}"

    def namespace_input_name(self, input_name: str) -> str:
        head, bracket, rest = input_name.partition("[")
        return f"fields[{head}]{bracket}{rest}"


@pytest.fixture
def renderer() -> RecordingRenderer:
    return RecordingRenderer()


@pytest.fixture
def assets() -> RecordingAssets:
    return RecordingAssets()


@pytest.fixture
def namespacer() -> PrefixNamespacer:
    return PrefixNamespacer()


@pytest.fixture
def name_color_table() -> dict:
    """Two-column table (single-line name, color) with one row."""
    return {
        "columns": [
            {"heading": "Name", "type": "singleline"},
            {"heading": "Color", "type": "color"},
        ],
        "rows": [["Red", "#F00"]],
    }
