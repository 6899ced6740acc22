# app/schemas/base.py
from typing import Annotated

from bson import ObjectId
from pydantic import AfterValidator, BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

# Zero-padded 24h clock; these strings order correctly when compared as text.
TIME_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"

WEEKDAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")


def _check_object_id(value: str) -> str:
    if not ObjectId.is_valid(value):
        raise ValueError(f"{value!r} is not a valid id")
    return value


ObjectIdStr = Annotated[str, AfterValidator(_check_object_id)]


class CamelModel(BaseModel):
    """Snake_case attributes in Python, camelCase keys on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
