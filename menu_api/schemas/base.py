"""Shared schema configuration"""

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """camelCase on the wire, snake_case in Python; both accepted on input"""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True
        str_strip_whitespace = True


def reject_null(value):
    """Explicit null is not allowed for non-nullable columns in partial updates"""
    if value is None:
        raise ValueError("may not be null")
    return value
