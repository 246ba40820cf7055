"""
Schema validation for Ralph state files.

prd.json is hand-edited, so every problem in the document is reported at
once rather than only the first one jsonschema trips over.
"""

import json
from pathlib import Path

from jsonschema import Draft202012Validator


class ValidationError(Exception):
    """Document does not match its schema.

    `path` is the dotted location of the first problem; the message lists all.
    """

    def __init__(self, schema_name: str, message: str, path: str = None):
        self.schema_name = schema_name
        self.path = path
        super().__init__(f"[{schema_name}] {message}")


_validators: dict[str, Draft202012Validator] = {}


def _get_schemas_dir() -> Path:
    return Path(__file__).parent.parent / "schemas"


def _get_validator(schema_name: str) -> Draft202012Validator:
    if schema_name not in _validators:
        schema_path = _get_schemas_dir() / f"{schema_name}.schema.json"
        if not schema_path.exists():
            raise ValidationError(schema_name, f"Schema file not found: {schema_path}")
        schema = json.loads(schema_path.read_text(encoding="utf-8"))
        Draft202012Validator.check_schema(schema)
        _validators[schema_name] = Draft202012Validator(schema)
    return _validators[schema_name]


def _dotted(error) -> str:
    return ".".join(str(p) for p in error.absolute_path) or "(root)"


def validate(data: dict, schema_name: str) -> None:
    """
    Validate data against named schema.

    Args:
        data: Parsed JSON document
        schema_name: Schema name (e.g., "prd")

    Raises:
        ValidationError: If validation fails
    """
    errors = sorted(
        _get_validator(schema_name).iter_errors(data),
        key=lambda e: list(map(str, e.absolute_path)),
    )
    if not errors:
        return
    problems = "; ".join(f"{e.message} at {_dotted(e)}" for e in errors)
    raise ValidationError(schema_name, problems, _dotted(errors[0]))
