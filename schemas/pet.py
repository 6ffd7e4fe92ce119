"""Pet profile schemas."""

from datetime import date
from enum import Enum
from typing import Literal, Optional

from pydantic import BaseModel, Field, ConfigDict, model_validator


class LifeStatus(str, Enum):
    """Whether the pet is alive or has passed away."""

    ACTIVE = "active"
    MEMORIAL = "memorial"


class Mode(str, Enum):
    """Conversation mode. Derived only from the pet's life status."""

    ACTIVE = "active"
    MEMORIAL = "memorial"

    @classmethod
    def from_status(cls, status: LifeStatus) -> "Mode":
        return cls.MEMORIAL if status == LifeStatus.MEMORIAL else cls.ACTIVE

    @property
    def is_memorial(self) -> bool:
        return self is Mode.MEMORIAL


class PetProfile(BaseModel):
    """A pet as seen by the conversation engine. Owned externally, immutable per request."""

    model_config = ConfigDict(frozen=True, use_enum_values=False)

    id: Optional[str] = Field(None, description="Pet ID in the external store")
    name: str = Field(..., min_length=1, max_length=100, description="Pet name")
    species: Literal["dog", "cat", "other"] = Field("other", description="Species")
    breed: str = Field("", max_length=100, description="Breed")
    gender: Literal["male", "female"] = Field("male", description="Gender")
    personality: str = Field("", max_length=1000, description="Free-text personality")
    birth_date: Optional[date] = Field(None, description="Birth date")
    status: LifeStatus = Field(LifeStatus.ACTIVE, description="Life status")
    memorial_date: Optional[date] = Field(
        None, description="Day the pet passed away. Present iff status is memorial"
    )

    # Personalization
    nicknames: Optional[str] = Field(None, max_length=200, description="Comma separated nicknames")
    special_habits: Optional[str] = Field(None, max_length=500)
    favorite_food: Optional[str] = Field(None, max_length=200)
    favorite_activity: Optional[str] = Field(None, max_length=200)
    favorite_place: Optional[str] = Field(None, max_length=200)
    adopted_date: Optional[date] = Field(None)
    how_we_met: Optional[str] = Field(None, max_length=500)
    together_period: Optional[str] = Field(None, max_length=100, description="Memorial: how long we were together")
    memorable_memory: Optional[str] = Field(None, max_length=1000, description="Memorial: a moment to keep")

    @model_validator(mode="after")
    def check_memorial_date(self) -> "PetProfile":
        """A memorial date is present exactly when the pet is in memorial status."""
        memorial = self.status == LifeStatus.MEMORIAL
        if self.memorial_date is not None and not memorial:
            raise ValueError("memorial_date is only allowed when status is memorial")
        if memorial and self.memorial_date is None:
            raise ValueError("memorial_date is required when status is memorial")
        return self

    @property
    def mode(self) -> Mode:
        """Conversation mode for this pet."""
        return Mode.from_status(self.status)
