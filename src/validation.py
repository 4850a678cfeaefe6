"""
Desired State Validation - JSON Schema validation of rule documents.

Provides the schema a desired-state document (YAML or JSON) must satisfy
before it is turned into a DesiredState.
"""

import logging
from typing import Any, Dict, Optional, Tuple

from jsonschema import Draft7Validator, SchemaError

from models import FirewallRuleAction, FirewallRuleProduct

logger = logging.getLogger(__name__)

MAX_DESCRIPTION_LENGTH = 500
MAX_PRIORITY = 2147483647

DESIRED_STATE_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "required": ["zone_id", "filter_id", "action"],
    "additionalProperties": False,
    "properties": {
        "zone_id": {"type": "string", "minLength": 1},
        "filter_id": {"type": "string", "minLength": 1},
        "action": {
            "type": "string",
            "enum": [a.value for a in FirewallRuleAction],
        },
        "description": {
            "type": ["string", "null"],
            "minLength": 1,
            "maxLength": MAX_DESCRIPTION_LENGTH,
        },
        "paused": {"type": "boolean"},
        "priority": {
            "type": ["integer", "null"],
            "minimum": 1,
            "maximum": MAX_PRIORITY,
        },
        "products": {
            "type": ["array", "null"],
            "minItems": 1,
            "uniqueItems": True,
            "items": {
                "type": "string",
                "enum": [p.value for p in FirewallRuleProduct],
            },
        },
    },
}


def validate_desired_state(
    document: Dict[str, Any], schema: Optional[Dict[str, Any]] = None
) -> Tuple[bool, Optional[str]]:
    """
    Validate a desired-state document.

    Args:
        document: The parsed YAML/JSON document.
        schema: Schema to validate against; defaults to DESIRED_STATE_SCHEMA.

    Returns:
        Tuple of (is_valid, error_message)
    """
    schema = schema or DESIRED_STATE_SCHEMA
    try:
        Draft7Validator.check_schema(schema)
    except SchemaError as e:
        return False, f"Invalid schema: {e.message}"

    validator = Draft7Validator(schema)
    errors = sorted(
        validator.iter_errors(document), key=lambda e: [str(p) for p in e.path]
    )

    if not errors:
        return True, None

    # Collect all validation errors
    error_messages = []
    for error in errors:
        path = ".".join(str(p) for p in error.absolute_path) or "(root)"
        error_messages.append(f"{path}: {error.message}")

    return False, "; ".join(error_messages)
