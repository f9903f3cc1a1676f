"""
Caloric target calculation.

Basal metabolic rate uses the Mifflin-St Jeor equation; the daily target is
BMR scaled by an activity multiplier plus a goal adjustment.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from ..backend.base import PlanBackend
from ..config.defaults import NutritionParams
from ..errors import InvalidInputError
from ..logging.config import get_logger

logger = get_logger(__name__)

INVALID_INPUT_MESSAGE = "Preencha todos os campos corretamente."


class Gender(str, Enum):
    MALE = "male"
    FEMALE = "female"


@dataclass(frozen=True)
class BodyMetrics:
    """Body metrics and preferences entered by the user."""

    weight_kg: float
    height_cm: float
    age: int
    gender: Gender
    activity_level: str = "sedentary"
    goal: str = "maintain_weight"

    @classmethod
    def from_form(cls, form: dict[str, Any],
                  params: Optional[NutritionParams] = None) -> "BodyMetrics":
        """
        Build metrics from raw form values.

        Raises:
            InvalidInputError: If any value is missing, non-positive or unknown
        """
        params = params or NutritionParams()
        invalid = []

        numbers = {}
        for name in ("weight_kg", "height_cm", "age"):
            try:
                value = float(form.get(name) or 0)
            except (TypeError, ValueError):
                value = 0.0
            if not math.isfinite(value) or value <= 0:
                invalid.append(name)
            elif name == "age" and int(value) < 1:
                invalid.append(name)
            numbers[name] = value

        try:
            gender = Gender(form.get("gender", Gender.MALE.value))
        except ValueError:
            invalid.append("gender")
            gender = Gender.MALE

        activity_level = form.get("activity_level", "sedentary")
        if activity_level not in params.activity_multipliers:
            invalid.append("activity_level")

        goal = form.get("goal", "maintain_weight")
        if goal not in params.goal_adjustments:
            invalid.append("goal")

        if invalid:
            raise InvalidInputError(INVALID_INPUT_MESSAGE, fields=invalid)

        return cls(
            weight_kg=numbers["weight_kg"],
            height_cm=numbers["height_cm"],
            age=int(numbers["age"]),
            gender=gender,
            activity_level=activity_level,
            goal=goal,
        )


def calculate_bmr(weight_kg: float, height_cm: float, age: int, gender: Gender) -> float:
    """Mifflin-St Jeor basal metabolic rate in kcal/day."""
    base = 10 * weight_kg + 6.25 * height_cm - 5 * age
    if gender == Gender.MALE:
        return base + 5
    return base - 161


def calculate_calorie_target(metrics: BodyMetrics,
                             params: Optional[NutritionParams] = None) -> int:
    """Daily caloric target, rounded half up to whole kcal."""
    params = params or NutritionParams()

    try:
        multiplier = params.activity_multipliers[metrics.activity_level]
        adjustment = params.goal_adjustments[metrics.goal]
    except KeyError as e:
        raise InvalidInputError(INVALID_INPUT_MESSAGE, fields=[str(e.args[0])]) from e

    bmr = calculate_bmr(metrics.weight_kg, metrics.height_cm, metrics.age, metrics.gender)
    return math.floor(bmr * multiplier + adjustment + 0.5)


def nutrition_record(metrics: BodyMetrics, target: int) -> dict[str, Any]:
    """Row stored in the user_nutrition table."""
    return {
        "peso": metrics.weight_kg,
        "altura": metrics.height_cm,
        "idade": metrics.age,
        "genero": metrics.gender.value,
        "atividade": metrics.activity_level,
        "objetivo": metrics.goal,
        "meta_calorica": target,
    }


async def save_calorie_target(backend: PlanBackend, metrics: BodyMetrics,
                              params: Optional[NutritionParams] = None) -> int:
    """Compute the caloric target and upsert it for the current user."""
    target = calculate_calorie_target(metrics, params)
    await backend.save_nutrition_target(nutrition_record(metrics, target))

    logger.info("Caloric target saved",
                meta_calorica=target,
                activity_level=metrics.activity_level,
                goal=metrics.goal)
    return target
