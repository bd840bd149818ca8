from __future__ import annotations
from pathlib import Path
import json
from pydantic import TypeAdapter
from rewardrules.engine.modifiers import Modifier, ChoiceEntry
from rewardrules.engine.requirements import Requirement

def export_schemas(out_dir: Path) -> list[Path]:
    out_dir.mkdir(parents=True, exist_ok=True)
    schemas = {
        "Modifier.schema.json": TypeAdapter(Modifier).json_schema(),
        "Requirement.schema.json": TypeAdapter(Requirement).json_schema(),
        "ChoiceEntry.schema.json": ChoiceEntry.model_json_schema(),
    }
    written = []
    for name, schema in schemas.items():
        target = out_dir / name
        target.write_text(json.dumps(schema, indent=2), encoding="utf-8")
        written.append(target)
    return written

if __name__ == "__main__":
    root = Path(__file__).resolve().parents[3] / "docs" / "schemas"
    export_schemas(root)
    print(f"Exported schemas to {root}")
