# File: unpacked/schemas/common.py

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class APIModel(BaseModel):
    """
    Base for every request / response body.

    The wire format is camelCase (``isPrivate``, ``imageUrl``); snake_case
    field names are accepted on input as well.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class RequestModel(APIModel):
    """Request bodies reject fields they do not declare."""

    model_config = ConfigDict(extra="forbid")


class MessageResponse(APIModel):
    message: str
