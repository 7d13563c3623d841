"""
Shared wire models.
"""
from typing import List, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    """Base for every API payload.

    All fields are optional. Absent fields are left unset and are omitted on
    serialisation, so an explicit ``False``/``0``/``""`` is never confused with
    a missing value.
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    def __str__(self) -> str:
        return self.model_dump_json(by_alias=True, exclude_none=True, indent=4)


class ErrorDetail(ApiModel):
    status: Optional[int] = None
    message: Optional[str] = None


class ErrorResponse(ApiModel):
    """The ``{"errors": [{"status": ..., "message": ...}]}`` envelope."""
    errors: List[ErrorDetail] = []
