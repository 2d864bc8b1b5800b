"""
Itinerary payload helpers.

Turns itinerary request models into column values. List entries are
stored as camelCase JSON objects, the shape clients send and read back.

Dependencies: pydantic, explorely.models.itinerary, explorely.core
System role: Itinerary request to storage mapping
"""

from typing import Any

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from explorely.core.exceptions import ValidationError
from explorely.models.itinerary import (
    Accommodation,
    Activity,
    CreateItineraryRequest,
    Restaurant,
    UpdateItineraryRequest,
)

SECTION_MODELS: dict[str, type[BaseModel]] = {
    "activities": Activity,
    "accommodations": Accommodation,
    "restaurants": Restaurant,
}


def stored_item(item: BaseModel) -> dict:
    """One activity, accommodation or restaurant as stored JSON."""
    return item.model_dump(mode="json", by_alias=True, exclude_none=True)


def itinerary_fields(payload: CreateItineraryRequest | UpdateItineraryRequest) -> dict:
    """
    Column values from a create or update payload.

    Update payloads only contribute the fields the client sent with a value.

    Args:
        payload: Validated request body

    Returns:
        dict: Column name -> value
    """
    partial = isinstance(payload, UpdateItineraryRequest)
    fields = payload.model_dump(
        exclude=set(SECTION_MODELS),
        exclude_unset=partial,
        exclude_none=partial,
    )
    for section in SECTION_MODELS:
        items = getattr(payload, section)
        if items is not None and (not partial or section in payload.model_fields_set):
            fields[section] = [stored_item(item) for item in items]
    return fields


def section_item(section: str, body: dict[str, Any]) -> dict:
    """
    Validate a raw entry against its section's schema.

    Raises:
        ValidationError: If the section is unknown or the entry is malformed
    """
    model = SECTION_MODELS.get(section)
    if model is None:
        raise ValidationError(f"Unknown itinerary section: {section}", field="section")
    try:
        return stored_item(model.model_validate(body))
    except PydanticValidationError as e:
        first = e.errors()[0]
        raise ValidationError(first["msg"], field=".".join(str(p) for p in first["loc"])) from e
