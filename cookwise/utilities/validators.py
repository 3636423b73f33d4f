"""
Input validation schemas using Pydantic for better data integrity.
"""
from datetime import date
from typing import List, Literal, Optional

from pydantic import BaseModel, Field, field_validator

from cookwise.utilities.config import DEFAULT_SERVINGS
from cookwise.utilities.constants import CATEGORIES, MEAL_TYPES, UNITS

Unit = Literal[UNITS]
Category = Literal[CATEGORIES]
MealType = Literal[MEAL_TYPES]


def _lower(v):
    return v.strip().lower() if isinstance(v, str) else v


class RecipeIngredientInput(BaseModel):
    """Schema for one ingredient line of a recipe."""
    name: str = Field(..., min_length=1, max_length=100)
    quantity: float = Field(0, ge=0)
    unit: Unit = "piece"
    category: Category = "other"
    original_text: str = ""
    note: Optional[str] = None

    @field_validator('name')
    @classmethod
    def strip_whitespace(cls, v):
        """Remove leading/trailing whitespace."""
        return v.strip()

    @field_validator('unit', 'category', mode='before')
    @classmethod
    def normalize_enum(cls, v):
        return _lower(v)


class RecipeInput(BaseModel):
    """Schema for recipe input validation."""
    title: str = Field(..., min_length=3, max_length=200)
    servings: int = Field(4, ge=1, le=50)
    description: str = ""
    prep_time: Optional[int] = Field(None, ge=0)
    cook_time: Optional[int] = Field(None, ge=0)
    ingredients: List[RecipeIngredientInput] = Field(default_factory=list)
    steps: List[str] = Field(default_factory=list)

    @field_validator('title')
    @classmethod
    def validate_title(cls, v):
        if not v.strip():
            raise ValueError('Recipe title cannot be empty')
        return v.strip()

    @field_validator('steps')
    @classmethod
    def validate_steps(cls, v):
        """Filter out empty steps."""
        return [step.strip() for step in v if step and step.strip()]


class PantryItemInput(BaseModel):
    """Schema for adding stock to the pantry."""
    name: str = Field(..., min_length=1, max_length=100)
    quantity: float = Field(..., ge=0)
    unit: Unit
    category: Category = "other"
    expiry_date: Optional[date] = None
    location: Optional[str] = None
    min_quantity: float = Field(0, ge=0)
    notes: Optional[str] = None

    @field_validator('unit', 'category', mode='before')
    @classmethod
    def normalize_enum(cls, v):
        return _lower(v)


class PantryUpdateInput(BaseModel):
    """Schema for pantry update validation (absolute values)."""
    quantity: Optional[float] = Field(None, ge=0)
    unit: Optional[Unit] = None
    expiry_date: Optional[date] = None
    location: Optional[str] = None
    min_quantity: Optional[float] = Field(None, ge=0)
    notes: Optional[str] = None

    @field_validator('unit', mode='before')
    @classmethod
    def normalize_unit(cls, v):
        return _lower(v)


class MealSlotInput(BaseModel):
    """Schema for assigning a recipe to a (date, meal type) slot."""
    day: date
    meal_type: MealType
    recipe_id: str = Field(..., min_length=1)
    servings: int = Field(DEFAULT_SERVINGS, ge=1, le=100)

    @field_validator('meal_type', mode='before')
    @classmethod
    def normalize_meal_type(cls, v):
        return _lower(v)


class GenerateShoppingListInput(BaseModel):
    """Any date inside the target week; defaults to today."""
    day: Optional[date] = None


class ShoppingListItemInput(BaseModel):
    """Schema for a manually added shopping list item."""
    name: str = Field(..., min_length=1, max_length=100)
    quantity: float = Field(1, ge=0)
    unit: Unit = "piece"
    category: Category = "other"

    @field_validator('unit', 'category', mode='before')
    @classmethod
    def normalize_enum(cls, v):
        return _lower(v)


class ToggleItemInput(BaseModel):
    checked: bool
