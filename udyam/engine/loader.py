"""SchemaLoader - loads and validates the form schema document."""

import json
import logging
import yaml
from pathlib import Path
from typing import Optional
from .schema import FormSchema

logger = logging.getLogger(__name__)

PACKAGE_ROOT = Path(__file__).resolve().parent.parent


class SchemaLoader:
    """
    Loads form schema documents from YAML or JSON files.

    Validates structure using Pydantic models.
    """

    def __init__(self, base_path: Optional[Path] = None):
        """
        Initialize loader.

        Args:
            base_path: Directory containing a schemas/ folder (default: the udyam package)
        """
        if base_path is None:
            base_path = PACKAGE_ROOT
        self.base_path = Path(base_path)

    def load_schema(self, name: str = "udyam") -> FormSchema:
        """
        Load a schema document by name.

        Looks for schemas/<name>.yaml, then schemas/<name>.yml, then schemas/<name>.json.

        Args:
            name: Schema name (e.g., 'udyam')

        Returns:
            Validated FormSchema instance

        Raises:
            FileNotFoundError: If no schema file exists
            ValidationError: If the document doesn't match the schema models
        """
        schema_dir = self.base_path / "schemas"
        for suffix in (".yaml", ".yml", ".json"):
            schema_path = schema_dir / f"{name}{suffix}"
            if schema_path.exists():
                return self.load_file(schema_path)

        raise FileNotFoundError(f"Form schema not found: {schema_dir / name}.yaml")

    def load_file(self, path: Path) -> FormSchema:
        """
        Load a schema document from an explicit path.

        Args:
            path: YAML or JSON file

        Returns:
            Validated FormSchema instance
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Form schema not found: {path}")

        with open(path, 'r', encoding='utf-8') as f:
            if path.suffix == '.json':
                data = json.load(f)
            else:
                data = yaml.safe_load(f)

        schema = FormSchema.model_validate(data)
        logger.debug("Loaded form schema %s (%d steps)", path, schema.step_count)
        return schema
