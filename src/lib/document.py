"""
Menu document loader for the menuwalk CLI.

A menu document is a YAML (or JSON) file holding item lists per location
and optional per-variant options; see models/document.py for the schema.
"""

import yaml
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from pydantic import ValidationError

from ..models.document import MenuDocumentModel
from .traversal import items_flatten

DOCUMENT_SUFFIXES = (".yaml", ".yml", ".json")


class DocumentError(Exception):
    """Raised when a menu document cannot be loaded or validated"""
    pass


class MenuDocument:
    """
    A loaded and validated menu document.

    Args:
        path: Path to the YAML/JSON file

    Raises:
        DocumentError: if the file is missing, unparseable or fails validation
    """

    def __init__(self, path: Any) -> None:
        self.path = Path(path)
        if not self.path.exists():
            raise DocumentError(f"Menu document not found: {self.path}")

        self.config = self._config_load()
        try:
            self.model = MenuDocumentModel.model_validate(self.config)
        except ValidationError as e:
            raise DocumentError(f"Invalid menu document {self.path.name}: {e}")

    def _config_load(self) -> Dict[str, Any]:
        """Load and parse the document"""
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                config: Any = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise DocumentError(f"Failed to parse {self.path.name}: {e}")
        except OSError as e:
            raise DocumentError(f"Failed to read {self.path.name}: {e}")

        if config is None:
            config = {}
        if not isinstance(config, dict):
            raise DocumentError(f"{self.path.name}: top level must be a mapping")
        return config

    def locations_list(self) -> List[str]:
        return sorted(self.model.locations)

    def location_has(self, location: str) -> bool:
        return location in self.model.locations

    def tree_get(self, location: str) -> Optional[List[Dict[str, Any]]]:
        """Flat host-shaped item list for ``location``, or None if undefined"""
        items = self.model.locations.get(location)
        if items is None:
            return None
        return items_flatten(items)

    def trees_get(self) -> Dict[str, List[Dict[str, Any]]]:
        return {location: items_flatten(items) for location, items in self.model.locations.items()}

    def variantOptions_get(self, variant: str) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        """(options, extra_options) stored for ``variant``; empty dicts if none"""
        stored = self.model.options.get(variant)
        if stored is None:
            return {}, {}
        return dict(stored.options), dict(stored.extra_options)

    def config_get(self, key: str, default: Any = None) -> Any:
        """
        Get a raw value from the document.

        Supports nested keys with dot notation:
          document.config_get('options.mobile.extra_options.accordion_mode')
        """
        value: Any = self.config
        for k in key.split("."):
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default
        return value

    def __repr__(self) -> str:
        return f"MenuDocument(path='{self.path}', locations={self.locations_list()})"


def documents_listAvailable(directory: Any) -> List[str]:
    """
    List menu document file names in ``directory``.

    Returns:
        Sorted names of files with a .yaml, .yml or .json suffix
    """
    path = Path(directory)
    if not path.is_dir():
        return []
    return sorted(
        item.name for item in path.iterdir() if item.is_file() and item.suffix.lower() in DOCUMENT_SUFFIXES
    )
