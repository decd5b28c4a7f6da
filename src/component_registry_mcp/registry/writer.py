"""
Registry manifest persistence.
"""

import json
import logging
import os

from ..constants import OUTPUT_FILE
from .types import RegistrySchema

logger = logging.getLogger(__name__)


def dump_registry(schema: RegistrySchema) -> str:
    """Serialize a manifest as 2-space indented JSON."""
    return json.dumps(schema.to_dict(), indent=2, ensure_ascii=False)


def write_registry(schema: RegistrySchema, output_dir: str) -> str:
    """
    Write <output_dir>/registry.json, creating the directory if needed.

    Returns:
        Path of the written file
    """
    os.makedirs(output_dir, exist_ok=True)
    registry_path = os.path.join(output_dir, OUTPUT_FILE)

    with open(registry_path, 'w', encoding='utf-8') as f:
        f.write(dump_registry(schema))
        f.write('\n')

    logger.info(f"registry.json path: {registry_path}")
    return registry_path
