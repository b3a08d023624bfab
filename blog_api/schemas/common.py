"""Shared schema configuration — camelCase on the wire, snake_case in Python.

Design Decisions:
    - alias_generator=to_camel: responses keep the authorId/authorEmail shape clients expect
    - populate_by_name: request bodies may use either spelling
    - from_attributes: response models are built straight from ORM rows
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base for every request/response schema."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )
