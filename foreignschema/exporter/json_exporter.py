"""JSON exporter for resolved schemas and their definitions."""
import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict

from ..config import DEFAULT_REF_PREFIX
from ..registry.type_registry import TypeRegistry
from ..schema.models import SchemaNode

logger = logging.getLogger(__name__)


class JsonExporter:
    """Export resolved schemas as an OpenAPI components document."""

    def build_document(
        self,
        registry: TypeRegistry,
        roots: Dict[str, SchemaNode],
        ref_prefix: str = DEFAULT_REF_PREFIX,
    ) -> Dict[str, Any]:
        """
        Build the document

        Args:
            registry: Registry holding the named definitions
            roots: Label -> schema returned by the facade for each exposed type
            ref_prefix: Prefix of every $ref

        Returns:
            Dict with metadata, the root schemas and components/schemas
        """
        schemas = registry.to_dict(ref_prefix)
        return {
            "metadata": {
                "created_at": datetime.now().isoformat(),
                "roots": len(roots),
                "definitions": len(schemas),
            },
            "roots": {label: schema.to_dict(ref_prefix) for label, schema in roots.items()},
            "components": {"schemas": schemas},
        }

    def export(
        self,
        output_file: Path,
        registry: TypeRegistry,
        roots: Dict[str, SchemaNode],
        ref_prefix: str = DEFAULT_REF_PREFIX,
    ) -> Dict[str, Any]:
        """Export to JSON file."""
        output_file = Path(output_file)
        output_file.parent.mkdir(parents=True, exist_ok=True)

        data = self.build_document(registry, roots, ref_prefix)

        with open(output_file, "w") as f:
            json.dump(data, f, indent=2)

        logger.info(
            f"Exported {len(roots)} schemas and "
            f"{data['metadata']['definitions']} definitions to {output_file}"
        )
        return data
