"""
JSON import/export of CLI settings.

Settings files hold the board configuration plus canvas and colour
options. Precedence when importing: JSON overrides argparse defaults, and
explicitly passed CLI flags override JSON.
"""

import argparse
import json
from typing import Any, Dict, List


def ensure_json_extension(path: str) -> str:
    """Append ``.json`` to ``path`` unless it already ends with it."""
    if not path.lower().endswith(".json"):
        path += ".json"
    return path


def parse_bool(value: Any) -> bool:
    """Parse a boolean setting given as a bool or as true/false, 1/0, yes/no text.

    Raises:
        ValueError: If ``value`` is neither.
    """
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in ("true", "1", "yes"):
        return True
    if text in ("false", "0", "no"):
        return False
    raise ValueError(f"Boolean value expected, got '{value}'")


class SettingsManager:
    """JSON import/export of parameter sets with CLI-precedence logic."""

    # Keys that are persisted to JSON.
    _PERSISTED_KEYS: List[str] = [
        "grid_type", "orientation", "board_shape", "width", "height",
        "radius", "size", "triangle_orientation", "canvas_width",
        "canvas_height", "padding", "default_fill", "palette", "color",
        "debug",
    ]

    # Persisted keys that hold booleans.
    _BOOL_KEYS: List[str] = ["debug"]

    @property
    def persisted_keys(self) -> List[str]:
        return list(self._PERSISTED_KEYS)

    def export_settings(self, params: argparse.Namespace, path: str) -> str:
        """Export current parameters to a JSON file.

        Args:
            params: The resolved argparse Namespace.
            path: Output JSON file path; ``.json`` is appended if missing.

        Returns:
            The path actually written.

        Raises:
            OSError: If the file cannot be written.
        """
        path = ensure_json_extension(path)
        data: Dict = {key: getattr(params, key, None) for key in self._PERSISTED_KEYS}
        with open(path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)
        return path

    def import_settings(self, path: str) -> Dict:
        """Import settings from a JSON file.

        Args:
            path: Path to the JSON settings file; ``.json`` is appended if
                missing.

        Returns:
            A dictionary of loaded settings.

        Raises:
            FileNotFoundError: If the file does not exist.
            json.JSONDecodeError: If the file is not valid JSON.
            ValueError: If the JSON document is not an object.
        """
        with open(ensure_json_extension(path), "r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError("Settings file must contain a JSON object")
        return data

    def merge_settings(
        self,
        defaults: argparse.Namespace,
        json_settings: Dict,
        explicit_keys: set,
    ) -> argparse.Namespace:
        """Merge JSON settings with CLI args, respecting precedence.

        Args:
            defaults: The argparse Namespace with default/CLI values.
            json_settings: Dictionary loaded from JSON.
            explicit_keys: Set of parameter names explicitly provided on CLI.

        Returns:
            The merged Namespace.

        Raises:
            ValueError: If a boolean setting holds something other than a
                boolean or boolean text.
        """
        for key in self._PERSISTED_KEYS:
            if key in json_settings and key not in explicit_keys:
                value = json_settings[key]
                if key in self._BOOL_KEYS:
                    value = parse_bool(value)
                setattr(defaults, key, value)
        return defaults
