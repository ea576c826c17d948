"""Enumerations shared by the scopes, the timing engine and the backends."""
from __future__ import annotations

from enum import Enum, Flag


class AnimationOptions(Flag):
    NONE = 0
    EXIT = 1
    BY_PARAGRAPH = 2
    BY_CHARACTER = 4
    WITH_PREVIOUS = 8
    AFTER_PREVIOUS = 16


class EffectKind(str, Enum):
    """Visual effects that can be applied to a shape."""

    # Entrance / exit effects
    APPEAR = "appear"
    FADE = "fade"
    DISSOLVE = "dissolve"
    WIPE = "wipe"
    BLINDS = "blinds"
    BOX = "box"
    CHECKERBOARD = "checkerboard"
    CIRCLE = "circle"
    DIAMOND = "diamond"
    PLUS = "plus"
    RANDOM_BARS = "random_bars"
    SPLIT = "split"
    STRIPS = "strips"
    WHEEL = "wheel"
    # Emphasis
    GROW_SHRINK = "grow_shrink"
    # Behaviours are added by the caller (motion paths)
    CUSTOM = "custom"
    MEDIA_PLAY = "media_play"


class TransitionKind(str, Enum):
    NONE = "none"
    CUT = "cut"
    CUT_THROUGH_BLACK = "cut_through_black"
    BLINDS_HORIZONTAL = "blinds_horizontal"
    BLINDS_VERTICAL = "blinds_vertical"
    CHECKERBOARD_ACROSS = "checkerboard_across"
    CHECKERBOARD_DOWN = "checkerboard_down"
    COVER_LEFT = "cover_left"
    COVER_UP = "cover_up"
    COVER_RIGHT = "cover_right"
    COVER_DOWN = "cover_down"
    COVER_LEFT_UP = "cover_left_up"
    COVER_RIGHT_UP = "cover_right_up"
    COVER_LEFT_DOWN = "cover_left_down"
    COVER_RIGHT_DOWN = "cover_right_down"
    DISSOLVE = "dissolve"
    FADE = "fade"
    UNCOVER_LEFT = "uncover_left"
    UNCOVER_UP = "uncover_up"
    UNCOVER_RIGHT = "uncover_right"
    UNCOVER_DOWN = "uncover_down"
    UNCOVER_LEFT_UP = "uncover_left_up"
    UNCOVER_RIGHT_UP = "uncover_right_up"
    UNCOVER_LEFT_DOWN = "uncover_left_down"
    UNCOVER_RIGHT_DOWN = "uncover_right_down"
    RANDOM_BARS_HORIZONTAL = "random_bars_horizontal"
    RANDOM_BARS_VERTICAL = "random_bars_vertical"
    STRIPS_UP_LEFT = "strips_up_left"
    STRIPS_UP_RIGHT = "strips_up_right"
    STRIPS_DOWN_LEFT = "strips_down_left"
    STRIPS_DOWN_RIGHT = "strips_down_right"
    WIPE_LEFT = "wipe_left"
    WIPE_UP = "wipe_up"
    WIPE_RIGHT = "wipe_right"
    WIPE_DOWN = "wipe_down"
    BOX_OUT = "box_out"
    BOX_IN = "box_in"
    PAN_LEFT = "pan_left"
    PAN_UP = "pan_up"
    PAN_RIGHT = "pan_right"
    PAN_DOWN = "pan_down"


class PrimaryImageAnimation(str, Enum):
    NONE = "none"
    FIT = "fit"
    # View moves right-to-left or bottom-to-top.
    SCROLL_NEAR = "scroll_near"
    # View moves left-to-right or top-to-bottom.
    SCROLL_FAR = "scroll_far"
    EXPAND = "expand"
    SHRINK = "shrink"
    EXPAND_OR_SHRINK = "expand_or_shrink"
