"""``p:transition`` elements for slide entry effects and auto-advance."""
from __future__ import annotations

from typing import Dict, Optional, Tuple

from lxml import etree
from pptx.oxml.ns import qn
from pptx.oxml.xmlchemy import OxmlElement

from closures.models import TransitionKind

from ..base import SlideHandle

_DIRECTIONS = {"left": "l", "up": "u", "right": "r", "down": "d"}

# kind -> (element tag, attributes)
_TRANSITION_ELEMENTS: Dict[TransitionKind, Tuple[str, Dict[str, str]]] = {
    TransitionKind.CUT: ("p:cut", {}),
    TransitionKind.CUT_THROUGH_BLACK: ("p:cut", {"thruBlk": "1"}),
    TransitionKind.BLINDS_HORIZONTAL: ("p:blinds", {"dir": "horz"}),
    TransitionKind.BLINDS_VERTICAL: ("p:blinds", {"dir": "vert"}),
    TransitionKind.CHECKERBOARD_ACROSS: ("p:checker", {"dir": "horz"}),
    TransitionKind.CHECKERBOARD_DOWN: ("p:checker", {"dir": "vert"}),
    TransitionKind.DISSOLVE: ("p:dissolve", {}),
    TransitionKind.FADE: ("p:fade", {}),
    TransitionKind.RANDOM_BARS_HORIZONTAL: ("p:randomBar", {"dir": "horz"}),
    TransitionKind.RANDOM_BARS_VERTICAL: ("p:randomBar", {"dir": "vert"}),
    TransitionKind.STRIPS_UP_LEFT: ("p:strips", {"dir": "lu"}),
    TransitionKind.STRIPS_UP_RIGHT: ("p:strips", {"dir": "ru"}),
    TransitionKind.STRIPS_DOWN_LEFT: ("p:strips", {"dir": "ld"}),
    TransitionKind.STRIPS_DOWN_RIGHT: ("p:strips", {"dir": "rd"}),
    TransitionKind.BOX_OUT: ("p:zoom", {"dir": "out"}),
    TransitionKind.BOX_IN: ("p:zoom", {"dir": "in"}),
}


def _directional(kind: TransitionKind) -> Optional[Tuple[str, Dict[str, str]]]:
    prefix, _, direction = kind.value.partition("_")
    tag = {"cover": "p:cover", "uncover": "p:pull", "wipe": "p:wipe", "pan": "p:push"}.get(prefix)
    if tag is None:
        return None
    parts = direction.split("_")
    code = "".join(_DIRECTIONS[part] for part in parts)
    return tag, {"dir": code}


def transition_element_for(kind: TransitionKind) -> Optional[Tuple[str, Dict[str, str]]]:
    if kind is TransitionKind.NONE:
        return None
    return _TRANSITION_ELEMENTS.get(kind) or _directional(kind)


def speed_for(duration: float) -> str:
    if duration <= 0.5:
        return "fast"
    if duration <= 0.75:
        return "med"
    return "slow"


def build_transition(slide: SlideHandle) -> Optional[etree._Element]:
    element_spec = transition_element_for(slide.transition)
    if element_spec is None and not slide.advance_on_time:
        return None
    transition = OxmlElement("p:transition")
    transition.set("spd", speed_for(slide.transition_duration))
    if slide.advance_on_time:
        transition.set("advTm", str(max(0, int(round(slide.advance_time * 1000)))))
    if element_spec is not None:
        tag, attrs = element_spec
        child = etree.SubElement(transition, qn(tag))
        for key, value in attrs.items():
            child.set(key, value)
    return transition
