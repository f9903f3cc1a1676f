"""
Templated workout plan generation.

Plans are picked from a fixed decision table keyed by activity level and
training preference (gym or home); no randomness is involved.
"""

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Optional

from ..backend.base import PlanBackend
from ..errors import InvalidInputError
from ..logging.config import get_logger

logger = get_logger(__name__)

DEFAULT_ACTIVITY_LEVEL = "moderately_active"


class TrainingPreference(str, Enum):
    GYM = "gym"
    HOME = "home"


class Intensity(str, Enum):
    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"


@dataclass(frozen=True)
class Exercise:
    name: str
    sets: str
    reps: str
    rest: str


@dataclass(frozen=True)
class TimedActivity:
    name: str
    duration: str


@dataclass(frozen=True)
class WorkoutDay:
    day: str
    exercises: tuple


@dataclass(frozen=True)
class Prescription:
    """Sets, reps and rest for one exercise slot."""
    sets: int
    reps: int
    rest_seconds: int

    def apply(self, name: str, extra_reps: int = 0) -> Exercise:
        return Exercise(name=name, sets=str(self.sets), reps=str(self.reps + extra_reps),
                        rest=f"{self.rest_seconds}s")


@dataclass(frozen=True)
class TrainingPlan:
    """A complete templated plan."""

    activity_level: str
    training_preference: TrainingPreference
    intensity: Intensity
    workout_days: tuple
    warmup: tuple = field(default_factory=tuple)
    cooldown: tuple = field(default_factory=tuple)
    tips: tuple = field(default_factory=tuple)

    @property
    def frequency_per_week(self) -> int:
        return len(self.workout_days)

    def plan_row(self) -> dict[str, Any]:
        """Row stored in the training_plans table."""
        return {
            "activity_level": self.activity_level,
            "training_preference": self.training_preference.value,
            "frequency_per_week": self.frequency_per_week,
        }

    def day_rows(self) -> list[dict[str, Any]]:
        """Rows stored in the workout_days table."""
        warmup = [asdict(item) for item in self.warmup]
        cooldown = [asdict(item) for item in self.cooldown]
        return [
            {
                "day_name": day.day,
                "exercises": [asdict(exercise) for exercise in day.exercises],
                "warmup": warmup,
                "cooldown": cooldown,
            }
            for day in self.workout_days
        ]


DAYS_BY_ACTIVITY = {
    "sedentary": 3,
    "lightly_active": 3,
    "moderately_active": 4,
    "very_active": 5,
    "extra_active": 5,
}

INTENSITY_BY_ACTIVITY = {
    "sedentary": Intensity.LOW,
    "lightly_active": Intensity.MODERATE,
    "moderately_active": Intensity.MODERATE,
    "very_active": Intensity.HIGH,
    "extra_active": Intensity.HIGH,
}

# (main lifts, accessory work)
PRESCRIPTIONS = {
    Intensity.LOW: (Prescription(3, 15, 60), Prescription(2, 18, 45)),
    Intensity.MODERATE: (Prescription(4, 12, 60), Prescription(3, 15, 45)),
    Intensity.HIGH: (Prescription(4, 10, 90), Prescription(3, 13, 45)),
}

# Each routine: three main exercises followed by two accessories
ROUTINES = {
    TrainingPreference.GYM: (
        ("Agachamento", "Supino Reto", "Remada Curvada",
         "Elevação Lateral", "Extensão de Tríceps na Polia"),
        ("Leg Press", "Puxada na Frente", "Desenvolvimento com Halter",
         "Rosca Direta", "Extensão de Quadríceps"),
        ("Stiff", "Supino Inclinado", "Remada Alta",
         "Extensão de Tríceps Corda", "Panturrilha em Pé"),
        ("Levantamento Terra", "Supino Declinado", "Barra Fixa",
         "Rosca Martelo", "Abdominal na Polia"),
        ("Afundo com Halteres", "Crucifixo", "Remada Unilateral",
         "Elevação Frontal", "Panturrilha Sentado"),
    ),
    TrainingPreference.HOME: (
        ("Agachamento Livre", "Flexão de Braço", "Remada com Mochila",
         "Elevação Lateral com Garrafa", "Tríceps no Banco"),
        ("Afundo", "Flexão Inclinada", "Superman",
         "Prancha", "Panturrilha em Pé"),
        ("Ponte de Glúteo", "Flexão Diamante", "Pike Push-up",
         "Abdominal Bicicleta", "Polichinelo"),
        ("Agachamento Búlgaro", "Flexão Declinada", "Remada Invertida na Mesa",
         "Mountain Climber", "Prancha Lateral"),
        ("Agachamento com Salto", "Burpee", "Stiff Unilateral",
         "Abdominal Supra", "Corrida Estacionária"),
    ),
}

# Calf work runs longer sets than the other accessories
EXTRA_REPS = {
    "Panturrilha em Pé": 5,
    "Panturrilha Sentado": 5,
}

ROUTINE_LETTERS = "ABCDE"
MAIN_EXERCISES_PER_DAY = 3

WARMUP = (
    TimedActivity("Mobilidade Articular", "3 minutos"),
    TimedActivity("Caminhada Leve", "5 minutos"),
    TimedActivity("Alongamento Dinâmico", "5 minutos"),
)

COOLDOWN = (
    TimedActivity("Alongamento Estático", "5 minutos"),
    TimedActivity("Respiração Profunda", "2 minutos"),
)

TIPS = (
    "Mantenha uma respiração controlada durante os exercícios",
    "Beba água regularmente durante o treino",
    "Mantenha a forma correta dos exercícios",
    "Ajuste as cargas conforme necessário",
    "Descanse adequadamente entre as séries",
)


def resolve_preference(raw: Optional[str]) -> TrainingPreference:
    """Map a free-form preference onto gym or home; defaults to gym."""
    try:
        return TrainingPreference((raw or "").strip().lower())
    except ValueError:
        return TrainingPreference.GYM


def resolve_activity_level(raw: Optional[str]) -> str:
    if raw in DAYS_BY_ACTIVITY:
        return raw
    return DEFAULT_ACTIVITY_LEVEL


def build_training_plan(
    activity_level: Optional[str] = None,
    training_preference: Optional[str] = None,
    frequency_per_week: Optional[int] = None
) -> TrainingPlan:
    """
    Select a templated workout plan.

    Args:
        activity_level: One of the caloric calculator activity levels;
            unknown values fall back to moderately_active
        training_preference: "gym" or "home"; anything else means gym
        frequency_per_week: Optional explicit day count overriding the
            activity-based default

    Returns:
        The selected plan

    Raises:
        InvalidInputError: If frequency_per_week is outside the available routines
    """
    level = resolve_activity_level(activity_level)
    preference = resolve_preference(training_preference)
    routines = ROUTINES[preference]

    days = frequency_per_week if frequency_per_week is not None else DAYS_BY_ACTIVITY[level]
    if not 1 <= days <= len(routines):
        raise InvalidInputError(
            f"frequency_per_week must be between 1 and {len(routines)}",
            fields=["frequency_per_week"]
        )

    intensity = INTENSITY_BY_ACTIVITY[level]
    main, accessory = PRESCRIPTIONS[intensity]

    workout_days = []
    for index in range(days):
        names = routines[index]
        exercises = tuple(
            main.apply(name) if slot < MAIN_EXERCISES_PER_DAY
            else accessory.apply(name, EXTRA_REPS.get(name, 0))
            for slot, name in enumerate(names)
        )
        workout_days.append(WorkoutDay(
            day=f"Dia {index + 1} - Treino {ROUTINE_LETTERS[index]}",
            exercises=exercises
        ))

    logger.debug("Training plan selected",
                 activity_level=level,
                 training_preference=preference.value,
                 intensity=intensity.value,
                 days=days)

    return TrainingPlan(
        activity_level=level,
        training_preference=preference,
        intensity=intensity,
        workout_days=tuple(workout_days),
        warmup=WARMUP,
        cooldown=COOLDOWN,
        tips=TIPS,
    )


async def save_training_plan(backend: PlanBackend, plan: TrainingPlan) -> str:
    """Persist a plan and its workout days; returns the stored plan id."""
    plan_id = await backend.save_training_plan(plan.plan_row(), plan.day_rows())
    logger.info("Training plan stored", plan_id=plan_id,
                frequency_per_week=plan.frequency_per_week)
    return plan_id
