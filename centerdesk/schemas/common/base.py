from typing import Any, Dict, Optional
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class RecordModel(BaseModel):
    """Stored field names are camelCase; Python attributes are snake_case"""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True
    )

    def to_document(self, exclude_unset: bool = False) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_unset=exclude_unset)


class RecordResponse(RecordModel):
    id: str
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
