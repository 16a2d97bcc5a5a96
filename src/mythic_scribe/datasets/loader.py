"""Loading dataset documents into validated records."""

from pathlib import Path
from typing import Any

import yaml
from loguru import logger
from pydantic import ValidationError

from mythic_scribe.datasets.models import ScribeDataset
from mythic_scribe.errors import DatasetError


def parse_dataset(data: Any) -> ScribeDataset:
    """Validate raw dataset data.

    Raises:
        DatasetError: If the data does not describe a dataset.
    """
    if data is None:
        return ScribeDataset()
    try:
        return ScribeDataset.model_validate(data)
    except ValidationError as e:
        logger.error(f"Dataset validation failed with {e.error_count()} errors")
        raise DatasetError(f"Invalid dataset: {e.error_count()} validation errors\n{e}") from e


def load_dataset(path: Path) -> ScribeDataset:
    """Load a dataset from a YAML or JSON file (JSON is valid YAML).

    Raises:
        DatasetError: If the file cannot be read, parsed or validated.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        logger.error(f"Failed to read dataset {path}: {e}")
        raise DatasetError(f"Cannot read dataset {path}: {e}") from e
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        logger.error(f"Failed to parse dataset {path}: {e}")
        raise DatasetError(f"Cannot parse dataset {path}: {e}") from e

    dataset = parse_dataset(data)
    logger.debug(
        f"Loaded dataset {path.name}: {len(dataset.mechanics)} mechanics, "
        f"{len(dataset.targeters)} targeters, {len(dataset.conditions)} conditions, "
        f"{len(dataset.enums)} enums, {len(dataset.placeholders)} placeholders"
    )
    return dataset
