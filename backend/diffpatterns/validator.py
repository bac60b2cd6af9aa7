import json
from pathlib import Path
from typing import List

import jsonschema

from diffpatterns.core.errors import ManifestError
from diffpatterns.utils.diff.models import FileDiff

SCHEMA_ROOT = Path(__file__).parent / "schemas"


def validate_manifest(payload: dict) -> None:
    schema = json.loads((SCHEMA_ROOT / "change_manifest.json").read_text(encoding="utf-8"))
    try:
        jsonschema.Draft202012Validator(schema).validate(payload)
    except jsonschema.ValidationError as e:
        where = "/".join(str(p) for p in e.absolute_path) or "<root>"
        raise ManifestError(f"Invalid change manifest at {where}: {e.message}")


def load_manifest(path: Path) -> dict:
    """
    오프라인 모드 입력: git 없이 미리 뽑아둔 파일별 diff 목록.
    """
    try:
        payload = json.loads(Path(path).read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ManifestError(f"Manifest is not valid JSON: {e}")

    validate_manifest(payload)
    return payload


def manifest_file_diffs(payload: dict) -> List[FileDiff]:
    return [
        FileDiff(filePath=f["path"], kind=f.get("kind", "Modify"), diffText=f["diff"])
        for f in payload["files"]
    ]
