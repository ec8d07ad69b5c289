from typing import Literal

from pydantic import BaseModel, Field

Goal = Literal["weight_loss", "muscle_gain", "endurance", "strength", "general_fitness"]
Experience = Literal["beginner", "intermediate", "advanced"]
Equipment = Literal["full_gym", "home_basic", "home_advanced", "bodyweight"]


class ClientCreate(BaseModel):
    """Input record for a new client.

    Attributes:
        weight: Body weight in kg
        height: Height in cm
        available_days: Weekday names the client can train on
    """

    name: str = Field(..., min_length=1)
    age: int = Field(..., gt=0)
    weight: int = Field(..., gt=0)
    height: int = Field(..., gt=0)
    goal: Goal
    experience: Experience
    available_days: list[str] = Field(default_factory=list)
    equipment: Equipment
    limitations: str | None = None


class ClientUpdate(BaseModel):
    """Partial update; only fields that are set are applied."""

    name: str | None = Field(None, min_length=1)
    age: int | None = Field(None, gt=0)
    weight: int | None = Field(None, gt=0)
    height: int | None = Field(None, gt=0)
    goal: Goal | None = None
    experience: Experience | None = None
    available_days: list[str] | None = None
    equipment: Equipment | None = None
    limitations: str | None = None
