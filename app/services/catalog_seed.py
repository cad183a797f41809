"""
Default catalog: four teachers and ten sessions, inserted only into an empty teachers table.
"""
from __future__ import annotations

import logging

from app.services.storage import DatabaseStorage

logger = logging.getLogger(__name__)

TEACHERS = [
    {
        "key": "sarah",
        "name": "Sarah Chen",
        "bio": "Sarah specializes in curating continuous ambient soundscapes for deep relaxation and distraction-free rest.",
        "specialty": "Ambient Soundscapes",
    },
    {
        "key": "marcus",
        "name": "Marcus Williams",
        "bio": "Marcus provides background sound to support breathing practice and rhythmic calm.",
        "specialty": "Breathwork Support",
    },
    {
        "key": "elena",
        "name": "Elena Rodriguez",
        "bio": "Elena curates ambient meditation audio for self-directed practice and inner focus.",
        "specialty": "Pure Ambient Meditation",
    },
    {
        "key": "james",
        "name": "James Park",
        "bio": "James creates ambient soundscapes and music-only sessions designed for focus and relaxation.",
        "specialty": "Ambient Music",
    },
]

# (title, description, category, duration, audio file, teacher key, premium, featured)
SESSIONS = [
    ("Morning Calm",
     "Start your day with this gentle 10-minute ambient sound designed to set a peaceful tone.",
     "meditation", 10, "morning-calm.mp3", "elena", False, True),
    ("Deep Sleep Journey",
     "Soothing sleep audio that helps you drift off naturally through ambient nature sounds.",
     "sleep", 30, "deep-sleep-journey.mp3", "sarah", False, True),
    ("Rhythmic Breath Support",
     "Background audio to support breathing practice. On-screen pattern: Inhale 4 · Hold 4 · Exhale 4 · Hold 4.",
     "breathwork", 5, "rhythmic-breath-support.mp3", "marcus", False, True),
    ("Ocean Waves",
     "Gentle ocean sounds to help you relax, focus, or drift off to sleep.",
     "music", 20, "ocean-waves.mp3", "james", False, False),
    ("Rainforest Ambience",
     "Immerse yourself in the peaceful sounds of a tropical rainforest.",
     "music", 30, "rainforest-ambience.mp3", "james", True, False),
    ("Evening Wind Down",
     "A 20-minute calming background audio session to help you release the day's stress and prepare for rest.",
     "meditation", 20, "evening-wind-down.mp3", "sarah", False, False),
    ("Focus & Clarity",
     "Ambient sound designed to sharpen your mind and improve concentration through distraction-free audio.",
     "meditation", 15, "focus-clarity.mp3", "elena", True, True),
    ("Square Breath Audio",
     "Background sound to support rhythmic breathing. On-screen pattern: Inhale, Hold, Exhale, Hold.",
     "breathwork", 10, "square-breath-audio.mp3", "marcus", False, False),
    ("Starlit Ambience",
     "Continuous ambient sound that takes you on a journey through the cosmos for deep sleep.",
     "sleep", 25, "starlit-ambience.mp3", "sarah", True, False),
    ("White Noise",
     "Pure white noise to mask distractions and promote deep focus or sleep.",
     "music", 60, "white-noise.mp3", None, False, False),
]


def audio_url(base: str | None, filename: str) -> str | None:
    if not base:
        return None
    return f"{base}{filename}" if base.endswith("/") else f"{base}/{filename}"


async def seed_catalog(storage: DatabaseStorage, audio_base_url: str | None = None) -> bool:
    """Insert the default catalog. Returns False (no-op) when teachers already exist."""
    if await storage.get_teachers():
        logger.info("Catalog already seeded, skipping")
        return False

    teacher_ids: dict[str, int] = {}
    for t in TEACHERS:
        data = {k: v for k, v in t.items() if k != "key"}
        teacher = await storage.create_teacher({**data, "avatar_url": None})
        teacher_ids[t["key"]] = teacher.id

    for title, description, category, duration, filename, teacher_key, premium, featured in SESSIONS:
        await storage.create_session(
            {
                "title": title,
                "description": description,
                "category": category,
                "duration": duration,
                "audio_url": audio_url(audio_base_url, filename),
                "image_url": None,
                "teacher_id": teacher_ids.get(teacher_key) if teacher_key else None,
                "is_premium": premium,
                "is_featured": featured,
            }
        )

    logger.info("Seeded %d teachers and %d sessions", len(TEACHERS), len(SESSIONS))
    return True
