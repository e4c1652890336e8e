from typing import List
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class UserTokenData(BaseModel):
    """
    Defines the structure of the JWT payload after validation.
    This schema is the contract between the identity provider and this service.
    """

    model_config = ConfigDict(populate_by_name=True)

    user_id: UUID = Field(..., alias="sub")
    roles: List[str] = Field(default_factory=list)
