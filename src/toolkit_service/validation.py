"""
Field validation for tool data.

`validate_tool_data` is the single source of the tool field rules. The HTTP
routes, direct calls into the mutation layer and the bulk paths all go
through it, so the rules cannot drift apart.
"""

from typing import Any, Dict, List, Mapping

from pydantic import AnyUrl, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from .errors import FieldViolation
from .models.tool import TOOL_CATEGORY_VALUES, TOOL_STATUS_VALUES

REQUIRED_FIELDS = ("title", "description", "url", "category")
OPTIONAL_TEXT_FIELDS = ("description_vi", "image")
PATCHABLE_FIELDS = REQUIRED_FIELDS + OPTIONAL_TEXT_FIELDS + ("status", "featured")

MAX_LENGTHS = {"title": 255, "url": 500, "image": 500}

FIELD_LABELS = {
    "title": "Title",
    "description": "Description",
    "url": "URL",
    "category": "Category",
    "status": "Status",
    "featured": "Featured",
    "image": "Image URL",
    "description_vi": "Localized description",
}

_url_adapter = TypeAdapter(AnyUrl)


def is_valid_url(value: str) -> bool:
    """True when `value` parses as an absolute URL with a scheme."""
    try:
        _url_adapter.validate_python(value)
    except PydanticValidationError:
        return False
    return True


def _is_blank(value: Any) -> bool:
    return not isinstance(value, str) or not value.strip()


def validate_tool_data(data: Mapping[str, Any], partial: bool = False) -> List[FieldViolation]:
    """
    Check tool fields against the field rules.

    Args:
        data: Raw field values (create input or update patch)
        partial: When True only the keys present in `data` are checked

    Returns:
        Every violated rule, in field order. An empty list means valid.
    """
    violations: List[FieldViolation] = []

    for field in REQUIRED_FIELDS:
        if partial and field not in data:
            continue
        if _is_blank(data.get(field)):
            violations.append(
                FieldViolation(field, "required", f"{FIELD_LABELS[field]} is required")
            )

    for field in OPTIONAL_TEXT_FIELDS:
        value = data.get(field)
        if value is not None and not isinstance(value, str):
            violations.append(
                FieldViolation(
                    field, "invalid_type", f"{FIELD_LABELS[field]} must be a string"
                )
            )

    for field, max_length in MAX_LENGTHS.items():
        value = data.get(field)
        if isinstance(value, str) and len(value.strip()) > max_length:
            violations.append(
                FieldViolation(
                    field,
                    "max_length",
                    f"{FIELD_LABELS[field]} must be at most {max_length} characters",
                )
            )

    url = data.get("url")
    if not _is_blank(url) and not is_valid_url(url.strip()):
        violations.append(FieldViolation("url", "invalid_url", "Invalid URL format"))

    image = data.get("image")
    if not _is_blank(image) and not is_valid_url(image.strip()):
        violations.append(
            FieldViolation("image", "invalid_url", "Invalid image URL format")
        )

    category = data.get("category")
    if not _is_blank(category) and category.strip() not in TOOL_CATEGORY_VALUES:
        violations.append(
            FieldViolation("category", "invalid_choice", "Invalid category value")
        )

    if "status" in data and (data["status"] is not None or partial):
        status = data["status"]
        if not isinstance(status, str) or status not in TOOL_STATUS_VALUES:
            violations.append(
                FieldViolation("status", "invalid_choice", "Invalid status value")
            )

    if "featured" in data and (data["featured"] is not None or partial):
        if not isinstance(data["featured"], bool):
            violations.append(
                FieldViolation("featured", "invalid_type", "Featured must be a boolean")
            )

    return violations


def normalize_tool_data(data: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Trim string fields and turn blank optional text into None.

    Only patchable fields survive; anything else in `data` is dropped.
    """
    normalized: Dict[str, Any] = {}
    for key, value in data.items():
        if key not in PATCHABLE_FIELDS:
            continue
        if isinstance(value, str):
            value = value.strip()
            if key in OPTIONAL_TEXT_FIELDS and not value:
                value = None
        normalized[key] = value
    return normalized
