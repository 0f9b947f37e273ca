"""
Activity Template Registry - Static catalog of training activities.

Templates are grouped into pools. Challenge pools are tiered by difficulty
(beginner, intermediate, advanced); exercise pools are cross-cutting
(breathing, grounding, cognitive, reflection, movement). A template never
carries level-specific data; see ActivityInstance for that.
"""

from enum import Enum
from types import MappingProxyType
from typing import Dict, List, Mapping, Sequence, Tuple

from pydantic import BaseModel, ConfigDict, Field


class ActivityCategory(str, Enum):
    """Whether an activity is a timed challenge or a fixed-pace exercise."""
    CHALLENGE = "challenge"
    EXERCISE = "exercise"


class ActivityPool(str, Enum):
    """Named template pools."""
    BEGINNER_CHALLENGES = "beginner_challenges"  # levels 1-50
    INTERMEDIATE_CHALLENGES = "intermediate_challenges"  # levels 51-150
    ADVANCED_CHALLENGES = "advanced_challenges"  # levels 151-250
    BREATHING_EXERCISES = "breathing_exercises"
    GROUNDING_EXERCISES = "grounding_exercises"
    COGNITIVE_EXERCISES = "cognitive_exercises"
    REFLECTION_EXERCISES = "reflection_exercises"
    MOVEMENT_EXERCISES = "movement_exercises"


class ActivityTemplate(BaseModel):
    """An immutable catalog entry for one kind of activity."""

    model_config = ConfigDict(frozen=True)

    type: str
    name: str
    icon: str
    category: ActivityCategory
    base_duration: int = Field(gt=0)  # seconds
    base_xp: int = Field(gt=0)


class ActivityRegistry:
    """
    Read-only mapping of pools to ordered template tuples.

    Type tags are unique across all pools. Pool order is significant:
    selection indexes into it, so reordering a pool changes every plan.
    """

    def __init__(self, pools: Mapping[ActivityPool, Sequence[ActivityTemplate]]):
        frozen: Dict[ActivityPool, Tuple[ActivityTemplate, ...]] = {}
        seen: Dict[str, ActivityPool] = {}
        for pool, templates in pools.items():
            pool = ActivityPool(pool)
            if not templates:
                raise ValueError(f"Activity pool {pool.value} is empty")
            for template in templates:
                if template.type in seen:
                    raise ValueError(
                        f"Activity type {template.type!r} appears in both "
                        f"{seen[template.type].value} and {pool.value}"
                    )
                seen[template.type] = pool
            frozen[pool] = tuple(templates)
        self._pools = MappingProxyType(frozen)
        self._by_type = MappingProxyType(
            {t.type: t for templates in frozen.values() for t in templates}
        )
        self._pool_of = MappingProxyType(seen)

    def pool(self, pool: ActivityPool) -> Tuple[ActivityTemplate, ...]:
        """Templates of a pool, in catalog order."""
        try:
            return self._pools[ActivityPool(pool)]
        except KeyError:
            raise KeyError(f"Unknown activity pool: {pool}") from None

    def combined(self, *pools: ActivityPool) -> Tuple[ActivityTemplate, ...]:
        """Concatenation of several pools, in the order given."""
        combined: List[ActivityTemplate] = []
        for pool in pools:
            combined.extend(self.pool(pool))
        return tuple(combined)

    def get(self, activity_type: str) -> ActivityTemplate:
        return self._by_type[activity_type]

    def pool_of(self, activity_type: str) -> ActivityPool:
        return self._pool_of[activity_type]

    @property
    def pools(self) -> Mapping[ActivityPool, Tuple[ActivityTemplate, ...]]:
        return self._pools

    def __contains__(self, activity_type: object) -> bool:
        return activity_type in self._by_type

    def __len__(self) -> int:
        return len(self._by_type)


def _challenge(type_: str, name: str, icon: str, duration: int, xp: int) -> ActivityTemplate:
    return ActivityTemplate(
        type=type_,
        name=name,
        icon=icon,
        category=ActivityCategory.CHALLENGE,
        base_duration=duration,
        base_xp=xp,
    )


def _exercise(type_: str, name: str, icon: str, duration: int, xp: int) -> ActivityTemplate:
    return ActivityTemplate(
        type=type_,
        name=name,
        icon=icon,
        category=ActivityCategory.EXERCISE,
        base_duration=duration,
        base_xp=xp,
    )


DEFAULT_POOLS: Dict[ActivityPool, List[ActivityTemplate]] = {
    ActivityPool.BEGINNER_CHALLENGES: [
        _challenge("gaze_hold", "Gaze Hold", "👁️", 20, 10),
        _challenge("focus_hold", "Focus Hold", "🎯", 20, 10),
        _challenge("finger_hold", "Finger Hold", "👆", 20, 10),
        _challenge("slow_tracking", "Slow Tracking", "🐌", 25, 12),
        _challenge("stillness_test", "Stillness Test", "🗿", 20, 15),
    ],
    ActivityPool.INTERMEDIATE_CHALLENGES: [
        _challenge("tap_only_correct", "Tap Only Correct", "✅", 30, 15),
        _challenge("reaction_inhibition", "Reaction Inhibition", "🛑", 30, 15),
        _challenge("multi_task_tap", "Multi Task Tap", "🔀", 30, 20),
        _challenge("memory_flash", "Memory Flash", "🧠", 30, 18),
        _challenge("rhythm_tap", "Rhythm Tap", "🥁", 30, 15),
        _challenge("finger_tracing", "Finger Tracing", "✍️", 35, 18),
    ],
    ActivityPool.ADVANCED_CHALLENGES: [
        _challenge("impulse_spike_test", "Impulse Spike Test", "⚡", 40, 25),
        _challenge("delay_unlock", "Delay Unlock", "🔐", 35, 22),
        _challenge("popup_ignore", "Popup Ignore", "🪟", 40, 25),
        _challenge("multi_object_tracking", "Multi Object Tracking", "🎱", 40, 22),
        _challenge("fake_notifications", "Fake Notifications", "🔔", 35, 20),
        _challenge("look_away", "Look Away", "👀", 30, 18),
        _challenge("anti_scroll_swipe", "Anti Scroll Swipe", "📜", 40, 22),
    ],
    ActivityPool.BREATHING_EXERCISES: [
        _exercise("slow_breathing", "Slow Breathing", "🫁", 120, 15),
        _exercise("box_breathing", "Box Breathing", "⬜", 180, 20),
        _exercise("breath_pacing", "Breath Pacing", "🌬️", 150, 18),
        _exercise("controlled_breathing", "Controlled Breathing", "🧘", 180, 20),
    ],
    ActivityPool.GROUNDING_EXERCISES: [
        _exercise("five_senses", "Five Senses", "👃", 180, 18),
        _exercise("body_scan", "Body Scan", "🧘‍♂️", 60, 12),
        _exercise("calm_visual", "Calm Visual", "🌊", 120, 15),
        _exercise("mental_reset", "Mental Reset", "🔄", 90, 12),
        _exercise("ten_second_reflection", "Ten Second Reflection", "⏱️", 10, 8),
    ],
    ActivityPool.COGNITIVE_EXERCISES: [
        _exercise("thought_reframe", "Thought Reframe", "🔄", 240, 25),
        _exercise("dopamine_pause", "Dopamine Pause", "📵", 300, 30),
        _exercise("positive_self_talk", "Positive Self Talk", "💬", 180, 22),
        _exercise("focus_sprint", "Focus Sprint", "⚡", 180, 25),
        _exercise("value_check", "Value Check", "💎", 240, 25),
        _exercise("urge_surfing", "Urge Surfing", "🏄", 300, 35),
        _exercise("positive_action", "Positive Action", "✨", 180, 20),
        _exercise("self_inquiry", "Self Inquiry", "🤔", 240, 28),
        _exercise("intent_setting", "Intent Setting", "🎯", 120, 18),
        _exercise("ego_detach", "Ego Detach", "☁️", 240, 30),
        _exercise("compulsion_detector", "Compulsion Detector", "🔍", 180, 22),
    ],
    ActivityPool.REFLECTION_EXERCISES: [
        _exercise("micro_journal", "Micro Journal", "📝", 180, 20),
        _exercise("distraction_log", "Distraction Log", "📊", 120, 15),
        _exercise("mood_naming", "Mood Naming", "😌", 120, 15),
        _exercise("vision_moment", "Vision Moment", "✨", 240, 25),
        _exercise("mini_gratitude", "Mini Gratitude", "🙏", 120, 15),
        _exercise("inner_mentor", "Inner Mentor", "🧙", 300, 35),
    ],
    ActivityPool.MOVEMENT_EXERCISES: [
        _exercise("body_release", "Body Release", "🤸", 180, 20),
    ],
}

DEFAULT_REGISTRY = ActivityRegistry(DEFAULT_POOLS)
