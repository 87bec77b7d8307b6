"""Common schemas for the API."""

import typing as t

from ninja import Schema
from pydantic import ConfigDict, StringConstraints
from pydantic.alias_generators import to_camel

OneToOneFiftyString = t.Annotated[str, StringConstraints(min_length=1, max_length=150, strip_whitespace=True)]


class CamelSchema(Schema):
    """Schema exposed with camelCase keys on the wire.

    Routes returning these must set ``by_alias=True``.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class VersionResponse(Schema):
    version: str


class ResponseOk(Schema):
    status: t.Literal["ok"] = "ok"
