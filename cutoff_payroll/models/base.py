"""
Base Model
Shared pydantic configuration for engine records
"""
from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class EngineModel(BaseModel):
    """Snake_case in Python, camelCase on the wire"""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        frozen = True


def pop_first(data: dict, *keys):
    """Remove every key from ``data``; return the first non-empty value found"""
    found = None
    for key in keys:
        value = data.pop(key, None)
        if found is None and value not in (None, ""):
            found = value
    return found
