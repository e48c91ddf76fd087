"""Domain models for check-ins."""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from uuid import UUID


class Mood(StrEnum):
    """Recognized moods for a check-in."""

    GREAT = "great"
    GOOD = "good"
    OKAY = "okay"
    CONCERNING = "concerning"
    DIFFICULT = "difficult"


@dataclass(frozen=True)
class MoodStyle:
    """Presentation metadata for a mood."""

    label: str
    description: str
    dot_color: str
    badge_background: str
    badge_text: str


MOOD_STYLES: dict[Mood, MoodStyle] = {
    Mood.GREAT: MoodStyle(
        label="Great",
        description="Great - energetic and happy",
        dot_color="#22c55e",
        badge_background="#dcfce7",
        badge_text="#166534",
    ),
    Mood.GOOD: MoodStyle(
        label="Good",
        description="Good - normal day",
        dot_color="#3b82f6",
        badge_background="#dbeafe",
        badge_text="#1e40af",
    ),
    Mood.OKAY: MoodStyle(
        label="Okay",
        description="Okay - a bit tired",
        dot_color="#eab308",
        badge_background="#fef9c3",
        badge_text="#854d0e",
    ),
    Mood.CONCERNING: MoodStyle(
        label="Concerning",
        description="Concerning - not themselves",
        dot_color="#f97316",
        badge_background="#ffedd5",
        badge_text="#9a3412",
    ),
    Mood.DIFFICULT: MoodStyle(
        label="Difficult",
        description="Difficult day",
        dot_color="#ef4444",
        badge_background="#fee2e2",
        badge_text="#991b1b",
    ),
}


def parse_mood(value: str | None) -> Mood | None:
    """Return the mood for a raw value, or None when it isn't recognized."""
    if not value:
        return None
    try:
        return Mood(value)
    except ValueError:
        return None


def mood_style(value: str) -> MoodStyle:
    """Return display metadata for a stored mood value.

    Unknown values get a neutral grey style labelled with the raw value.
    """
    mood = parse_mood(value)
    if mood is not None:
        return MOOD_STYLES[mood]
    return MoodStyle(
        label=value[:1].upper() + value[1:],
        description=value,
        dot_color="#6b7280",
        badge_background="#f3f4f6",
        badge_text="#1f2937",
    )


@dataclass(frozen=True)
class NewCheckin:
    """Payload for a check-in that hasn't been stored yet."""

    parent_name: str
    mood: Mood
    notes: str | None
    user_id: UUID | None


@dataclass(frozen=True)
class CheckinRecord:
    """A stored check-in. Records are never modified after creation."""

    id: UUID
    user_id: UUID | None
    parent_name: str
    mood: str
    notes: str | None
    created_at: datetime
