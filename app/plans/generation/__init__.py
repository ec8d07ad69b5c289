"""AI workout plan generation."""

from app.plans.generation.requester import PlanRequestError, PlanRequestTimeoutError, request_plan_text
from app.plans.generation.service import PlanGenerationResult, generate_workout_plan

__all__ = [
    "PlanGenerationResult",
    "PlanRequestError",
    "PlanRequestTimeoutError",
    "generate_workout_plan",
    "request_plan_text",
]
