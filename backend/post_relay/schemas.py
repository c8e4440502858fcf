from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Post(BaseModel):
    """A post exactly as the upstream API returns it.

    Built with ``from_wire`` and never validated: values, nulls and extra keys
    are kept as received, and ``to_wire`` gives back the same keys.
    """

    user_id: int | None = Field(default=None, alias="userId")
    id: int | None = None
    title: str | None = None
    body: str | None = None
    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        extra="allow",
        json_schema_extra={
            "example": {
                "userId": 1,
                "id": 1,
                "title": "sunt aut facere repellat provident",
                "body": "quia et suscipit\nsuscipit recusandae",
            }
        },
    )

    @classmethod
    def from_wire(cls, data: Any) -> "Post":
        if not isinstance(data, dict):
            raise TypeError(f"expected a JSON object, got {type(data).__name__}")
        return cls.model_construct(**data)

    def to_wire(self) -> dict[str, Any]:
        data = {
            field.alias or name: getattr(self, name)
            for name, field in type(self).model_fields.items()
            if name in self.model_fields_set
        }
        data.update(self.model_extra or {})
        return data
