from datetime import datetime, timezone
from typing import Any

import markdown2  # pyright: ignore[reportMissingTypeStubs]
from pydantic import BaseModel, ConfigDict, Field


class Recipe:
    def __init__(
        self,
        *,
        id: int,
        title: str,
        description: str = "",
        category: str = "",
        ingredients: list[str] | None = None,
        instructions: list[str] | None = None,
        cook_time: str = "",
        servings: str = "",
        created_at: str | None = None,
    ) -> None:
        self.id = id
        self.title = title
        self.description = description
        self.category = category
        self.ingredients = [] if ingredients is None else list(ingredients)
        self.instructions = [] if instructions is None else list(instructions)
        self.cook_time = cook_time
        self.servings = servings
        self.created_at = created_at

    def __repr__(self) -> str:
        return f"<Recipe(id={self.id}, title={self.title})>"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Recipe) and self.to_dict() == other.to_dict()

    @property
    def html(self) -> str:
        # Escape mode, recipe text comes from users.
        return markdown2.markdown(  # pyright: ignore[reportUnknownVariableType, reportUnknownMemberType]
            self.description, safe_mode="escape"
        )

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "category": self.category,
            "ingredients": list(self.ingredients),
            "instructions": list(self.instructions),
            "cookTime": self.cook_time,
            "servings": self.servings,
        }
        if self.created_at is not None:
            data["createdAt"] = self.created_at
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Recipe":
        return cls(
            id=int(data["id"]),
            title=data.get("title", ""),
            description=data.get("description", ""),
            category=data.get("category", ""),
            ingredients=data.get("ingredients"),
            instructions=data.get("instructions"),
            cook_time=data.get("cookTime", ""),
            servings=data.get("servings", ""),
            created_at=data.get("createdAt"),
        )


class RecipeIn(BaseModel):
    """Payload accepted when creating a recipe."""

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    title: str = Field(min_length=1)
    description: str = ""
    category: str = ""
    ingredients: list[str] = Field(default_factory=list)
    instructions: list[str] = Field(default_factory=list)
    cook_time: str = Field(default="", alias="cookTime")
    servings: str = ""


class RecipeUpdate(BaseModel):
    """Partial update, only the fields sent are applied."""

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    title: str | None = Field(default=None, min_length=1)
    description: str | None = None
    category: str | None = None
    ingredients: list[str] | None = None
    instructions: list[str] | None = None
    cook_time: str | None = Field(default=None, alias="cookTime")
    servings: str | None = None


def utcnow_iso() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")
