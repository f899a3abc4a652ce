"""Built-in demo notes used when there is no readable notes document."""

from datetime import datetime, timedelta

from sparkflow.models.note import Bullet, Note


def sample_notes(now: datetime) -> list[Note]:
    """Return the demo collection, backdated relative to ``now``.

    Each call generates fresh ids. The list is not sorted.
    """

    def days_ago(days: int) -> datetime:
        return now - timedelta(days=days)

    def hours_ago(hours: int) -> datetime:
        return now - timedelta(hours=hours)

    return [
        Note(
            spark="It is not that we have a short time to live, but that we waste a lot of it.",
            source="Seneca, On the Shortness of Life",
            tags=("stoicism", "quote", "philosophy"),
            bullets=(
                Bullet(
                    text="This hit me hard today. I spent 3 hours scrolling through social "
                    "media and felt empty afterward.",
                    timestamp=days_ago(14),
                ),
                Bullet(
                    text="Started tracking my time this week, a small experiment in practical "
                    "stoicism. Eye-opening how much I give to things that don't matter.",
                    timestamp=days_ago(7),
                ),
                Bullet(
                    text="One month in. I've reclaimed about 2 hours daily. "
                    "Reading more, worrying less.",
                    timestamp=days_ago(1),
                ),
            ),
            created_at=days_ago(14),
        ),
        Note(
            spark="Design is not just what it looks like and feels like. "
            "Design is how it works.",
            source="Steve Jobs",
            tags=("design", "inspiration"),
            bullets=(
                Bullet(
                    text="Working on the app redesign. Need to remember this: "
                    "function first, beauty follows.",
                    timestamp=days_ago(10),
                ),
                Bullet(
                    text="User testing revealed my 'beautiful' navigation confused everyone. "
                    "Back to basics.",
                    timestamp=days_ago(3),
                ),
            ),
            created_at=days_ago(10),
        ),
        Note(
            spark="The best ideas come when I stop trying to have them.",
            tags=("idea", "creativity", "mindfulness"),
            bullets=(
                Bullet(
                    text="Noticed this pattern while showering. "
                    "My brain finally relaxes and connects dots.",
                    timestamp=days_ago(21),
                ),
                Bullet(
                    text="Started taking walks without podcasts. Just silence. More ideas in "
                    "one week than the whole month before.",
                    timestamp=days_ago(12),
                ),
                Bullet(
                    text="Maybe productivity isn't about doing more. "
                    "It's about creating space for clarity.",
                    timestamp=days_ago(5),
                ),
                Bullet(
                    text="Read about 'diffuse mode' thinking. "
                    "Science confirms what I felt intuitively.",
                    timestamp=days_ago(1),
                ),
            ),
            created_at=days_ago(21),
        ),
        Note(
            spark="I dreamed of a library where every book was a life I could have lived.",
            tags=("dream", "journal"),
            bullets=(
                Bullet(
                    text="Woke up feeling both melancholy and free. "
                    "So many paths, but this one is mine.",
                    timestamp=days_ago(8),
                ),
            ),
            created_at=days_ago(8),
        ),
        Note(
            spark="In the beginner's mind there are many possibilities, "
            "but in the expert's there are few.",
            source="Shunryu Suzuki, Zen Mind, Beginner's Mind",
            tags=("philosophy", "mindfulness", "quote"),
            bullets=(
                Bullet(
                    text="Starting to learn Python. Feeling overwhelmed "
                    "but also excited by not knowing.",
                    timestamp=days_ago(30),
                ),
                Bullet(
                    text="Six months into coding. I catch myself dismissing 'naive' "
                    "approaches. Must stay curious.",
                    timestamp=days_ago(5),
                ),
            ),
            created_at=days_ago(30),
        ),
        Note(
            spark="Every person I meet knows something I don't.",
            source="Bill Nye",
            tags=("inspiration", "philosophy"),
            bullets=(
                Bullet(
                    text="Had coffee with a stranger today. "
                    "Learned about bee migration patterns. Fascinating.",
                    timestamp=days_ago(4),
                ),
            ),
            created_at=days_ago(4),
        ),
        Note(
            spark="The obstacle is the way.",
            source="Marcus Aurelius (via Ryan Holiday)",
            tags=("stoicism", "quote"),
            bullets=(
                Bullet(
                    text="Facing a major setback at work. Instead of resisting, "
                    "asking: what can this teach me?",
                    timestamp=hours_ago(6),
                ),
            ),
            created_at=hours_ago(6),
        ),
    ]
