"""Prompt construction for AI workout plan generation."""

from app.db.models import Client

PLAN_OUTPUT_FORMAT = """Respond ONLY with a JSON array, one element per training day, with this structure:
[
  {
    "day": "Monday",
    "focus": "Upper Body",
    "exercises": [
      {"name": "Exercise name", "sets": 3, "reps": "10-12"}
    ]
  }
]

Rules:
- Always quote reps as a string ("8-12", "10 per leg", "Maximum").
- Rest days use "focus": "Rest" and an empty exercises list.
- Do not add commentary before or after the JSON.
"""


def _humanize(value: str) -> str:
    return value.replace("_", " ")


def build_plan_prompt(client: Client, duration: str, focus: str) -> str:
    """Build the generation prompt for a client profile.

    Args:
        client: Client the plan is for
        duration: Requested duration (e.g. "1_week")
        focus: Requested focus (e.g. "balanced")

    Returns:
        Prompt text
    """
    available_days = ", ".join(client.available_days or []) or "Any"
    return f"""Create a detailed {_humanize(duration)} workout plan for a gym client with the following profile:

Name: {client.name}
Age: {client.age}
Goal: {_humanize(client.goal)}
Experience Level: {client.experience}
Available Days: {available_days}
Equipment: {_humanize(client.equipment)}
Limitations: {client.limitations or "None"}
Focus: {_humanize(focus)}

{PLAN_OUTPUT_FORMAT}
Make sure the plan is appropriate for their experience level, respects their limitations, and uses their available equipment. Focus on {_humanize(focus)} while maintaining a balanced approach."""
