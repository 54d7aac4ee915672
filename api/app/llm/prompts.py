"""Prompt templates for recommendations and record pattern analysis.

Builders are pure: they only format the profile and record schemas they are
given. Unset profile fields render as placeholder text so the model can tell
"unknown" from "empty".
"""

from __future__ import annotations

from typing import Sequence

from app.models.recommendation import RecommendationType
from app.schema.profile import ProfileRead
from app.schema.record import RecordRead

NOT_SET = "not set"
NONE_LISTED = "none"
PROMPT_RECORD_LIMIT = 5

TYPE_LABELS: dict[RecommendationType, str] = {
    RecommendationType.FOOD: "food or dishes",
    RecommendationType.TRAVEL: "travel destinations",
    RecommendationType.EXERCISE: "workouts or exercise routes",
}

RECOMMENDATION_RESPONSE_FORMAT = """## Response format
Provide 3-5 recommendations as JSON in exactly this shape:
{
  "recommendations": [
    {
      "name": "recommendation name",
      "reason": "why it fits, tied to the user's preferences",
      "score": 0.95,
      "details": "optional extra detail"
    }
  ]
}
"score" is a match score between 0 and 1."""

ANALYSIS_RESPONSE_FORMAT = """## Response format
{
  "patterns": {
    "food": ["food taste patterns you found"],
    "travel": ["travel style patterns you found"],
    "exercise": ["exercise patterns you found"]
  },
  "suggestions": ["preferences worth adding to the profile"],
  "insights": "a short overall summary"
}"""


def _join(values: Sequence[str], placeholder: str) -> str:
    return ", ".join(values) if values else placeholder


def _format_rating(rating: int | None) -> str:
    return f"{rating}/5" if rating else "no rating"


def build_system_prompt(profile: ProfileRead) -> str:
    """Describe the user to the model: identity, tastes, and daily routine."""
    preferences = profile.preferences
    routines = profile.routines
    return f"""You are the user's personal life agent. You give tailored suggestions based on their tastes and routines.

## User
- Name: {profile.name}
- Location: {profile.location or NOT_SET}

## Food
- Likes: {_join(preferences.food, NOT_SET)}
- Allergies / must avoid: {_join(preferences.allergies, NONE_LISTED)}
- Dislikes: {_join(preferences.dislikes, NONE_LISTED)}

## Travel
- Preferred styles: {_join(preferences.travel, NOT_SET)}

## Exercise
- Enjoys: {_join(preferences.exercise, NOT_SET)}

## Daily routine
- Wake-up time: {routines.wake_up_time or NOT_SET}
- Bedtime: {routines.sleep_time or NOT_SET}
- Work schedule: {routines.work_schedule or NOT_SET}
- Exercise time: {routines.exercise_time or NOT_SET}

Always be friendly and personal. Explain every recommendation in terms of the user's preferences."""


def build_recommendation_prompt(
    rec_type: RecommendationType,
    profile: ProfileRead,
    context: str | None = None,
    recent_records: Sequence[RecordRead] | None = None,
) -> str:
    """Build the full instruction for a recommendation request.

    Args:
        rec_type: Domain to recommend for.
        profile: The active profile.
        context: Optional free text (mood, weather, company...).
        recent_records: Records of the same type, newest first; only the first
            five are included.

    Returns:
        str: Prompt ending with the JSON response contract.
    """
    label = TYPE_LABELS[rec_type]
    sections = [build_system_prompt(profile), f"## Request\nRecommend {label} for the user."]

    if context:
        sections.append(f"## Additional context\n{context}")

    if recent_records:
        lines = [
            f"- {record.title} ({_format_rating(record.rating)}, {record.record_date.isoformat()})"
            for record in list(recent_records)[:PROMPT_RECORD_LIMIT]
        ]
        sections.append(f"## Recent {label} records\n" + "\n".join(lines))

    sections.append(RECOMMENDATION_RESPONSE_FORMAT)
    return "\n\n".join(sections)


def build_analysis_prompt(profile: ProfileRead, records: Sequence[RecordRead]) -> str:
    """Ask the model to find taste patterns across logged records."""
    lines = [
        f"- [{record.type.value}] {record.title}: {record.description or 'no description'} "
        f"({_format_rating(record.rating)})"
        for record in records
    ]
    return "\n\n".join(
        [
            build_system_prompt(profile),
            "## Analysis request\nAnalyze the user's records and identify their taste patterns.",
            "## Records\n" + "\n".join(lines),
            ANALYSIS_RESPONSE_FORMAT,
        ]
    )


def build_chat_greeting(profile: ProfileRead) -> tuple[str, str]:
    """Return the persona instruction and the agent's opening line for a chat."""
    persona = (
        f'You are the personal life agent of "{profile.name}". '
        "You chat with them and give tailored food, travel, and exercise suggestions. "
        "Keep replies friendly and personal."
    )
    return persona, f"Hi {profile.name}! How can I help you today?"


FEEDBACK_RESPONSE_FORMAT = """## Response format
{
  "adjustment": "which taste factor to adjust",
  "avoid": ["things to stop recommending"],
  "prefer": ["things to recommend more often"],
  "note": "anything worth remembering"
}"""


def build_feedback_prompt(recommendation: str, liked: bool, reason: str | None = None) -> str:
    """Ask how one like/dislike should change the next round of recommendations."""
    verdict = "liked" if liked else "did not like"
    sections = [f'The user {verdict} the recommendation "{recommendation}".']
    if reason:
        sections[0] += f"\nReason: {reason}"
    sections.append("Based on this feedback, explain how future recommendations should change.")
    sections.append(FEEDBACK_RESPONSE_FORMAT)
    return "\n\n".join(sections)
