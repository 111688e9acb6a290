"""Personas that act on assignments."""

from enum import Enum

from pydantic import BaseModel, Field


class Role(str, Enum):
    """Calling persona's role. FinOps/Admin assign work, DataEngineer does it."""

    FINOPS = "FinOps"
    ADMIN = "Admin"
    DATA_ENGINEER = "DataEngineer"


class Actor(BaseModel):
    """Who is issuing a command: display name plus role."""

    name: str = Field(min_length=1)
    role: Role
