from .palette import Palette
from .task import (
    AnimationState,
    AppData,
    SortMode,
    Task,
    ONBOARDING_HINTS,
    onboarding_tasks,
    CHECK_ANIM_DURATION,
    DELETE_ANIM_DURATION,
    FPS,
    TICK_INTERVAL,
)
from .effects import (
    Effect,
    EFFECT_COUNT,
    PROGRESS_EFFECTS,
    NOISE_EFFECTS,
    choose_effect,
    render_effect,
    render_delete,
    render_open,
    render_done,
)

__all__ = [
    "Palette",
    "AnimationState",
    "AppData",
    "SortMode",
    "Task",
    "ONBOARDING_HINTS",
    "onboarding_tasks",
    "CHECK_ANIM_DURATION",
    "DELETE_ANIM_DURATION",
    "FPS",
    "TICK_INTERVAL",
    # Effects
    "Effect",
    "EFFECT_COUNT",
    "PROGRESS_EFFECTS",
    "NOISE_EFFECTS",
    "choose_effect",
    "render_effect",
    "render_delete",
    "render_open",
    "render_done",
]
