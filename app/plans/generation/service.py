"""Workout plan generation service.

Single entry point for drafting a plan with the generative model:
load client -> build prompt -> request text -> normalize -> persist.

A response that cannot be normalized is never stored. The caller gets the
raw text back with `needs_regeneration` set, so it can show it and offer a
regenerate action.
"""

from dataclasses import dataclass
from datetime import datetime, timezone

import httpx
from loguru import logger

from app.clients.repository import require_client
from app.config.settings import Settings
from app.plans.generation.prompts import build_plan_prompt
from app.plans.generation.requester import request_plan_text
from app.plans.normalizer import normalize
from app.plans.store import StoredPlan, create_plan


@dataclass
class PlanGenerationResult:
    """Outcome of one generation attempt.

    Attributes:
        plan: Stored plan, or None if the model output was unusable
        raw_text: Model text exactly as received
    """

    plan: StoredPlan | None
    raw_text: str

    @property
    def needs_regeneration(self) -> bool:
        return self.plan is None


def _plan_name(focus: str, created: datetime) -> str:
    return f"{focus.replace('_', ' ').title()} Plan - {created.date().isoformat()}"


async def generate_workout_plan(
    client_id: int,
    duration: str = "1_week",
    focus: str = "balanced",
    *,
    config: Settings | None = None,
    http_client: httpx.AsyncClient | None = None,
) -> PlanGenerationResult:
    """Generate, normalize and store a workout plan for a client.

    Args:
        client_id: Client to generate for
        duration: Requested duration (1_week, 2_weeks, 4_weeks)
        focus: Requested focus (balanced, strength, cardio, flexibility)
        config: Settings override
        http_client: Optional HTTP client for the model request

    Returns:
        PlanGenerationResult

    Raises:
        ClientNotFoundError: If the client does not exist
        PlanRequestError: If the model request fails
    """
    client = require_client(client_id)
    prompt = build_plan_prompt(client, duration, focus)

    raw_text = await request_plan_text(prompt, config=config, http_client=http_client)

    days = normalize(raw_text)
    if days is None:
        logger.warning(
            "Generated plan could not be normalized, not storing it",
            client_id=client_id,
            duration=duration,
            focus=focus,
        )
        return PlanGenerationResult(plan=None, raw_text=raw_text)

    stored = create_plan(
        client_id,
        days,
        name=_plan_name(focus, datetime.now(timezone.utc)),
        description=f"AI-generated workout plan for {client.name}",
        duration=duration,
        focus=focus,
    )
    logger.info(
        "Workout plan generated",
        client_id=client_id,
        plan_id=stored.id,
        days=len(days),
        rest_days=sum(1 for day in days if day.is_rest),
    )
    return PlanGenerationResult(plan=stored, raw_text=raw_text)
