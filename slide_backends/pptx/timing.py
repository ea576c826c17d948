"""Serialise a slide's main sequence into PresentationML ``p:timing``.

All effects are laid out as "with previous" children of a single group that
starts when the slide begins; each effect's trigger delay is its absolute start
time, which is how the timeline engine schedules them.
"""
from __future__ import annotations

from dataclasses import dataclass
from itertools import count
from typing import Iterator, List, Optional, Sequence

from lxml import etree
from pptx.oxml.ns import qn
from pptx.oxml.xmlchemy import OxmlElement

from closures.models import EffectKind

from ..base import EffectHandle, SlideHandle


@dataclass(frozen=True)
class EffectPreset:
    preset_id: int
    preset_class: str
    subtype: int = 0
    filter: Optional[str] = None


_PRESETS = {
    EffectKind.APPEAR: EffectPreset(1, "entr"),
    EffectKind.FADE: EffectPreset(10, "entr", 0, "fade"),
    EffectKind.DISSOLVE: EffectPreset(9, "entr", 0, "dissolve"),
    EffectKind.WIPE: EffectPreset(22, "entr", 4, "wipe(down)"),
    EffectKind.BLINDS: EffectPreset(3, "entr", 10, "blinds(horizontal)"),
    EffectKind.BOX: EffectPreset(4, "entr", 16, "box(in)"),
    EffectKind.CHECKERBOARD: EffectPreset(5, "entr", 10, "checkerboard(across)"),
    EffectKind.CIRCLE: EffectPreset(6, "entr", 16, "circle(in)"),
    EffectKind.DIAMOND: EffectPreset(8, "entr", 16, "diamond(in)"),
    EffectKind.PLUS: EffectPreset(13, "entr", 16, "plus(in)"),
    EffectKind.RANDOM_BARS: EffectPreset(14, "entr", 10, "randombar(horizontal)"),
    EffectKind.SPLIT: EffectPreset(16, "entr", 21, "barn(inVertical)"),
    EffectKind.STRIPS: EffectPreset(18, "entr", 12, "strips(downLeft)"),
    EffectKind.WHEEL: EffectPreset(21, "entr", 1, "wheel(1)"),
    EffectKind.GROW_SHRINK: EffectPreset(6, "emph"),
    EffectKind.CUSTOM: EffectPreset(0, "path"),
    EffectKind.MEDIA_PLAY: EffectPreset(1, "mediacall"),
}

DEFAULT_GROW_PERCENT = 150.0


def preset_for(effect: EffectHandle) -> EffectPreset:
    preset = _PRESETS[effect.kind]
    if effect.exit and preset.preset_class == "entr":
        return EffectPreset(preset.preset_id, "exit", preset.subtype, preset.filter)
    return preset


def _ms(seconds: float) -> str:
    return str(max(0, int(round(seconds * 1000))))


def _sub(parent, tag: str, **attrs) -> etree._Element:
    element = etree.SubElement(parent, qn(tag))
    for key, value in attrs.items():
        element.set(key, str(value))
    return element


class TimingWriter:
    """Builds ``p:timing`` for one slide."""

    def __init__(self, slide: SlideHandle) -> None:
        self.slide = slide
        self._ids: Iterator[int] = count(1)

    def build(self) -> Optional[etree._Element]:
        media = [effect for effect in self.slide.effects if effect.media_stop_after_slides is not None]
        if not self.slide.effects:
            return None
        timing = OxmlElement("p:timing")
        tn_lst = _sub(timing, "p:tnLst")
        root_par = _sub(tn_lst, "p:par")
        root_ctn = _sub(root_par, "p:cTn", id=next(self._ids), dur="indefinite", restart="never", nodeType="tmRoot")
        root_children = _sub(root_ctn, "p:childTnLst")

        seq = _sub(root_children, "p:seq", concurrent="1", nextAc="seek")
        main_id = next(self._ids)
        main_ctn = _sub(seq, "p:cTn", id=main_id, dur="indefinite", nodeType="mainSeq")
        main_children = _sub(main_ctn, "p:childTnLst")

        group_par = _sub(main_children, "p:par")
        group_ctn = _sub(group_par, "p:cTn", id=next(self._ids), fill="hold")
        group_conds = _sub(group_ctn, "p:stCondLst")
        _sub(group_conds, "p:cond", delay="indefinite")
        on_begin = _sub(group_conds, "p:cond", evt="onBegin", delay="0")
        _sub(on_begin, "p:tn", val=main_id)
        group_children = _sub(group_ctn, "p:childTnLst")

        inner_par = _sub(group_children, "p:par")
        inner_ctn = _sub(inner_par, "p:cTn", id=next(self._ids), fill="hold")
        _sub(_sub(inner_ctn, "p:stCondLst"), "p:cond", delay="0")
        inner_children = _sub(inner_ctn, "p:childTnLst")

        for effect in self.slide.effects:
            self._write_effect(inner_children, effect)

        for name, event in (("p:prevCondLst", "onPrev"), ("p:nextCondLst", "onNext")):
            cond = _sub(_sub(seq, name), "p:cond", evt=event, delay="0")
            _sub(_sub(cond, "p:tgtEl"), "p:sldTgt")

        for effect in media:
            self._write_media_node(root_children, effect)

        self._write_build_list(timing)
        return timing

    def _target(self, parent, effect: EffectHandle) -> None:
        sp_tgt = _sub(_sub(parent, "p:tgtEl"), "p:spTgt", spid=effect.shape.shape_id)
        if effect.paragraph is not None:
            _sub(_sub(sp_tgt, "p:txEl"), "p:pRg", st=effect.paragraph, end=effect.paragraph)

    def _behavior(self, parent, tag: str, effect: EffectHandle, *, duration: str, delay: Optional[str] = None, **attrs):
        element = _sub(parent, tag, **attrs)
        c_bhvr = _sub(element, "p:cBhvr")
        ctn = _sub(c_bhvr, "p:cTn", id=next(self._ids), dur=duration, fill="hold")
        if delay is not None:
            _sub(_sub(ctn, "p:stCondLst"), "p:cond", delay=delay)
        self._target(c_bhvr, effect)
        return element, c_bhvr

    def _write_effect(self, parent, effect: EffectHandle) -> None:
        preset = preset_for(effect)
        duration = _ms(effect.timing.duration)
        par = _sub(parent, "p:par")
        attrs = {
            "id": next(self._ids),
            "presetID": preset.preset_id,
            "presetClass": preset.preset_class,
            "presetSubtype": preset.subtype,
            "fill": "hold",
            "grpId": 0,
            "nodeType": "withEffect",
        }
        if effect.timing.smooth_end:
            attrs["decel"] = 100000
        ctn = _sub(par, "p:cTn", **attrs)
        _sub(_sub(ctn, "p:stCondLst"), "p:cond", delay=_ms(effect.timing.delay))
        if effect.by_character:
            iterate = _sub(ctn, "p:iterate", type="lt")
            _sub(iterate, "p:tmPct", val=10000)
        children = _sub(ctn, "p:childTnLst")

        if preset.preset_class in ("entr", "exit"):
            self._write_visibility_effect(children, effect, preset, duration)
        elif effect.kind is EffectKind.MEDIA_PLAY:
            self._behavior(children, "p:cmd", effect, duration="1", type="call", cmd="playFrom(0.0)")
        else:
            if effect.motion_path:
                _, c_bhvr = self._behavior(
                    children, "p:animMotion", effect, duration=duration,
                    origin="layout", path=f"{effect.motion_path} E", pathEditMode="relative", ptsTypes="",
                )
                names = _sub(c_bhvr, "p:attrNameLst")
                for attr_name in ("ppt_x", "ppt_y"):
                    _sub(names, "p:attrName").text = attr_name
            percent = effect.scale_percent
            if percent is None and effect.kind is EffectKind.GROW_SHRINK:
                percent = DEFAULT_GROW_PERCENT
            if percent is not None:
                element, _ = self._behavior(children, "p:animScale", effect, duration=duration)
                value = int(round(percent * 1000))
                _sub(element, "p:by", x=value, y=value)

    def _write_visibility_effect(self, children, effect: EffectHandle, preset: EffectPreset, duration: str) -> None:
        if not effect.exit:
            self._write_set(children, effect, "visible", delay="0")
            if preset.filter:
                self._behavior(children, "p:animEffect", effect, duration=duration, transition="in", filter=preset.filter)
            return
        if preset.filter:
            self._behavior(children, "p:animEffect", effect, duration=duration, transition="out", filter=preset.filter)
            hide_at = str(max(0, int(duration) - 1))
        else:
            hide_at = "0"
        self._write_set(children, effect, "hidden", delay=hide_at)

    def _write_set(self, parent, effect: EffectHandle, visibility: str, *, delay: str) -> None:
        element, c_bhvr = self._behavior(parent, "p:set", effect, duration="1", delay=delay)
        _sub(_sub(c_bhvr, "p:attrNameLst"), "p:attrName").text = "style.visibility"
        _sub(_sub(element, "p:to"), "p:strVal", val=visibility)

    def _write_media_node(self, parent, effect: EffectHandle) -> None:
        video = _sub(parent, "p:video")
        node = _sub(video, "p:cMediaNode", vol="80000", numSld=effect.media_stop_after_slides)
        ctn = _sub(node, "p:cTn", id=next(self._ids), fill="hold", display="0")
        _sub(_sub(ctn, "p:stCondLst"), "p:cond", delay="indefinite")
        _sub(_sub(node, "p:tgtEl"), "p:spTgt", spid=effect.shape.shape_id)

    def _write_build_list(self, timing) -> None:
        built: List[int] = []
        for effect in self.slide.effects:
            shape_id = effect.shape.shape_id
            if effect.paragraph is not None and shape_id not in built:
                built.append(shape_id)
        if not built:
            return
        bld_lst = _sub(timing, "p:bldLst")
        for shape_id in built:
            _sub(bld_lst, "p:bldP", spid=shape_id, grpId=0, build="p")


def build_timing(slide: SlideHandle) -> Optional[etree._Element]:
    return TimingWriter(slide).build()


def replace_slide_children(slide_element, elements: Sequence[etree._Element]) -> None:
    """Swap ``p:transition``/``p:timing`` on a ``p:sld`` element, keeping schema order."""
    for tag in ("p:transition", "p:timing"):
        for existing in slide_element.findall(qn(tag)):
            slide_element.remove(existing)
    ext_lst = slide_element.find(qn("p:extLst"))
    for element in elements:
        if ext_lst is not None:
            ext_lst.addprevious(element)
        else:
            slide_element.append(element)
