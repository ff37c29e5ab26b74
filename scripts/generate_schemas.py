"""Generate JSON schemas from Pydantic models and save to schemas/ directory."""

import json
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from treeorigin.contracts import RoundTripReport
from treeorigin.kernel.config import ComposeConfig


def generate_schemas():
    """Generate JSON schemas for the compose config and check report."""
    schemas_dir = Path(__file__).parent.parent / "schemas"
    schemas_dir.mkdir(exist_ok=True)

    for filename, model in (
        ("compose_config.schema.json", ComposeConfig),
        ("roundtrip_report.schema.json", RoundTripReport),
    ):
        schema_path = schemas_dir / filename
        with open(schema_path, 'w', encoding='utf-8') as f:
            json.dump(model.model_json_schema(mode="serialization"), f, indent=2, ensure_ascii=False)
        print(f"Generated: {schema_path}")

    print("\nSchema generation complete!")


if __name__ == "__main__":
    generate_schemas()
