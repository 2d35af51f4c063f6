"""Shared pydantic configuration for records persisted in the JSON document."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class Record(BaseModel):
    """
    Base for persisted records: snake_case attributes, camelCase JSON keys.

    Keys the models do not declare are kept and written back unchanged, so a
    read-modify-write never drops data from the document.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        validate_assignment=True,
        extra="allow",
    )

    def to_json_dict(self) -> dict:
        """Serialize with camelCase keys, omitting unset optional fields."""
        return self.model_dump(by_alias=True, mode="json", exclude_none=True)
