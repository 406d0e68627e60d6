"""
Input validation schemas using Pydantic for better data integrity.
"""
from pydantic import BaseModel, Field, field_validator
from typing import List, Optional
from datetime import date

from weekfit.utilities.constants import DAYS, SLOT_ORDER, QUESTIONS


def _allowed(question_id: str) -> set:
    for q in QUESTIONS:
        if q['id'] == question_id:
            return {opt['value'] for opt in q['options']}
    return set()


class QuestionnaireInput(BaseModel):
    """Schema for a complete questionnaire answer set."""
    goal: str = Field(..., min_length=1)
    restrictions: List[str] = Field(..., min_length=1)
    budget: str = Field(..., min_length=1)
    time: str = Field(..., min_length=1)
    experience: str = Field(..., min_length=1)
    cuisines: List[str] = Field(..., min_length=1)
    meals: List[str] = Field(..., min_length=1)

    @field_validator('goal', 'budget', 'time', 'experience')
    @classmethod
    def validate_single(cls, v, info):
        """Single-choice answers must be one of the question's options."""
        v = v.strip()
        if v not in _allowed(info.field_name):
            raise ValueError(f'Invalid option for {info.field_name}: {v}')
        return v

    @field_validator('restrictions', 'cuisines', 'meals')
    @classmethod
    def validate_multiple(cls, v, info):
        """Multiple-choice answers: known options only, duplicates dropped."""
        allowed = _allowed(info.field_name)
        cleaned: List[str] = []
        for item in v:
            item = (item or '').strip()
            if item not in allowed:
                raise ValueError(f'Invalid option for {info.field_name}: {item}')
            if item not in cleaned:
                cleaned.append(item)
        if not cleaned:
            raise ValueError(f'{info.field_name} requires at least one option')
        return cleaned


class RegenerateMealInput(BaseModel):
    """Schema for a single-slot regeneration request."""
    day: str
    slot: str

    @field_validator('day')
    @classmethod
    def validate_day(cls, v):
        v = v.strip().lower()
        if v not in DAYS:
            raise ValueError(f'Unknown day: {v}')
        return v

    @field_validator('slot')
    @classmethod
    def validate_slot(cls, v):
        v = v.strip().lower()
        if v not in SLOT_ORDER:
            raise ValueError(f'Unknown meal slot: {v}')
        return v


class ProgressInput(BaseModel):
    """Schema for a body-measurement entry."""
    recorded_date: Optional[date] = None
    weight: Optional[float] = Field(None, gt=0, le=500)
    body_fat_percentage: Optional[float] = Field(None, ge=0, le=100)
    muscle_mass: Optional[float] = Field(None, ge=0, le=300)
    waist_circumference: Optional[float] = Field(None, gt=0, le=300)
    notes: Optional[str] = Field(None, max_length=500)

    @field_validator('notes')
    @classmethod
    def strip_notes(cls, v):
        """Remove leading/trailing whitespace; empty notes become None."""
        if isinstance(v, str):
            v = v.strip()
            return v or None
        return v


class RecipeAssistantInput(BaseModel):
    """Schema for the 'what is in my fridge' assistant."""
    ingredients: str = Field(..., max_length=1000)


class SignUpInput(BaseModel):
    email: str = Field(..., min_length=3, max_length=254)
    password: str = Field(..., min_length=6, max_length=128)
    full_name: str = Field('', max_length=200)

    @field_validator('email')
    @classmethod
    def validate_email(cls, v):
        v = v.strip().lower()
        if '@' not in v or v.startswith('@') or v.endswith('@'):
            raise ValueError('Invalid email address')
        return v


class LoginInput(BaseModel):
    email: str = Field(..., min_length=3, max_length=254)
    password: str = Field(..., min_length=1, max_length=128)


# AI proxy bodies keep the camelCase keys used by the browser client
class GenerateRecipeInput(BaseModel):
    preferences: Optional[str] = None
    mealType: Optional[str] = None
    dietGoal: Optional[str] = None


class GenerateWeeklyMenuInput(BaseModel):
    preferences: Optional[str] = None
    dietGoal: Optional[str] = None
    budget: Optional[str] = None
    timeAvailable: Optional[str] = None
