import logging
from dataclasses import replace
from typing import Callable, Collection, List, Sequence

from core.color import hex_to_rgb, is_grayscale, recolor, sanitize_channel, shift_hue, RGB
from core.constants import CHANNELS
from core.errors import EmptySelectionError
from core.types import RGBA, ColorOptions, ColorParameter

log = logging.getLogger()


def require_selection(selection: Collection[str], action: str):
    if not selection:
        raise EmptySelectionError(
            f"No parameters selected. Please select at least one parameter before {action}."
        )


def is_guarded(rgba: RGBA, options: ColorOptions) -> bool:
    return options.ignore_grayscale and is_grayscale(rgba)


def apply_color(rgba: RGBA, target: RGB, options: ColorOptions, bypass_guard: bool = False) -> RGBA:
    """
    Recolor one value towards `target`.

    Grayscale values are left alone while `ignore_grayscale` is on, unless the caller
    bypasses the guard (direct edits of a single row always do).
    """
    if not bypass_guard and is_guarded(rgba, options):
        return rgba
    return recolor(rgba, target, options.preserve_intensity)


def _map_selected(params: Sequence[ColorParameter], selection: Collection[str],
                  fn: Callable[[ColorParameter], RGBA]) -> List[ColorParameter]:
    # only changed parameters are copied, the rest are shared with the previous snapshot
    result = []
    for param in params:
        if param.id in selection:
            rgba = fn(param)
            if rgba != param.rgba:
                param = replace(param, rgba=rgba)
        result.append(param)
    return result


def apply_master_color(params, selection, hex_color: str, options: ColorOptions) -> List[ColorParameter]:
    require_selection(selection, "applying the master color")
    target = hex_to_rgb(hex_color)
    return _map_selected(params, selection, lambda p: apply_color(p.rgba, target, options))


def hue_shift_rgba(rgba: RGBA, degrees: float, options: ColorOptions) -> RGBA:
    if is_guarded(rgba, options):
        return rgba
    return shift_hue(rgba, degrees)


def apply_hue_shift(params, selection, degrees: float, options: ColorOptions) -> List[ColorParameter]:
    require_selection(selection, "applying the hue shift")
    return _map_selected(params, selection, lambda p: hue_shift_rgba(p.rgba, degrees, options))


def is_previewing(param: ColorParameter, selection, degrees: float, options: ColorOptions) -> bool:
    return param.id in selection and degrees != 0 and not is_guarded(param.rgba, options)


def preview_rgba(param: ColorParameter, selection, degrees: float, options: ColorOptions) -> RGBA:
    # always derived from the committed value, never accumulated
    if not is_previewing(param, selection, degrees, options):
        return param.rgba
    return shift_hue(param.rgba, degrees)


def shuffle_assignments(params, selection, palette: Sequence[str]) -> dict:
    """Map each selected source file to a palette color, in order of first appearance."""
    assignments = {}
    for param in params:
        if param.id in selection and param.relative_path not in assignments:
            assignments[param.relative_path] = palette[len(assignments) % len(palette)]
    return assignments


def apply_shuffle(params, selection, palette: Sequence[str], options: ColorOptions) -> List[ColorParameter]:
    require_selection(selection, "applying shuffle")
    if not palette:
        raise ValueError("Shuffle palette is empty")

    targets = {path: hex_to_rgb(color)
               for path, color in shuffle_assignments(params, selection, palette).items()}
    log.debug(f"Shuffling {len(targets)} file(s) across {len(palette)} color(s)")
    return _map_selected(params, selection,
                         lambda p: apply_color(p.rgba, targets[p.relative_path], options))


def edit_parameter_color(params, param_id: str, hex_color: str, options: ColorOptions) -> List[ColorParameter]:
    target = hex_to_rgb(hex_color)
    return _map_selected(params, {param_id},
                         lambda p: apply_color(p.rgba, target, options, bypass_guard=True))


def edit_parameter_channel(params, param_id: str, channel: str, value) -> List[ColorParameter]:
    if channel not in CHANNELS:
        raise ValueError(f"Unknown channel: {channel}")
    number = sanitize_channel(value)
    return _map_selected(params, {param_id},
                         lambda p: replace(p.rgba, **{channel.lower(): number}))
