"""Stacking-context classification.

Decides whether a set of declared properties creates a stacking
context on its own. `isolation: isolate` is kept out of
that verdict and answered by `isolation_is_isolate`, so rules can tell
when isolation duplicates a context that already exists.

All lookup tables are module-level frozensets built once at import.
"""

from collections.abc import Mapping

# Properties that can take part in stacking-context creation
STACKING_CONTEXT_PROPERTIES = frozenset(
    [
        "position",
        "opacity",
        "transform",
        "filter",
        "backdrop-filter",
        "isolation",
        "mix-blend-mode",
        "background-blend-mode",
        "contain",
        "will-change",
        "perspective",
        "clip-path",
        "mask",
        "mask-image",
        "mask-border",
        "z-index",
    ]
)

POSITIONED_VALUES = frozenset(["relative", "absolute", "fixed", "sticky"])

CONTAIN_VALUES = frozenset(["layout", "paint", "strict", "content"])

WILL_CHANGE_TRIGGERS = STACKING_CONTEXT_PROPERTIES | frozenset(["opacity", "transform"])

FLEX_GRID_DISPLAYS = frozenset(["flex", "inline-flex", "grid", "inline-grid"])

CLIP_MASK_PROPERTIES = ("clip-path", "mask", "mask-image", "mask-border")

# No-op transforms used only to force a compositing layer
HACK_TRANSFORMS = frozenset(
    [
        "translatez(0)",
        "translate3d(0,0,0)",
        "matrix3d(1,0,0,0,0,1,0,0,0,0,1,0,0,0,0,1)",
    ]
)

HACK_WILL_CHANGE_TOKENS = ("opacity", "transform", "z-index")

HACK_OPACITY_MIN = 0.99


def _value(properties: Mapping[str, str], name: str) -> str | None:
    value = properties.get(name)
    if value is None:
        return None
    return value.strip().lower()


def _present_and_not(properties: Mapping[str, str], name: str, neutral: str) -> bool:
    value = _value(properties, name)
    return value is not None and value != neutral


def parse_z_index(value: str | None) -> int | None:
    """Parse a z-index value as an integer.

    `auto` and anything that is not an integer yield None.
    """
    if value is None:
        return None
    text = value.strip().lower()
    if not text or text == "auto":
        return None
    try:
        return int(text)
    except ValueError:
        return None


def parse_opacity(value: str | None) -> float | None:
    """Parse an opacity value; percentages map onto 0..1."""
    if value is None:
        return None
    text = value.strip().lower()
    try:
        if text.endswith("%"):
            return float(text[:-1]) / 100
        return float(text)
    except ValueError:
        return None


def has_z_index(properties: Mapping[str, str]) -> bool:
    """True when z-index is declared with a value other than `auto`."""
    value = _value(properties, "z-index")
    return bool(value) and value != "auto"


def isolation_is_isolate(properties: Mapping[str, str]) -> bool:
    """True iff `isolation` is declared as `isolate`."""
    return _value(properties, "isolation") == "isolate"


def has_position_and_z_index_stacking_context(properties: Mapping[str, str]) -> bool:
    return _value(properties, "position") in POSITIONED_VALUES and has_z_index(properties)


def has_flex_or_grid_item_z_index_stacking_context(
    properties: Mapping[str, str], parent_display: str | None = None
) -> bool:
    """Flex/grid items with a z-index create a stacking context.

    The parent's display cannot be read from the element's own block, so
    it is passed in, or taken from a `parent_display` attribute on the
    property map.
    """
    if parent_display is None:
        parent_display = getattr(properties, "parent_display", None)
    if not parent_display:
        return False
    return parent_display.strip().lower() in FLEX_GRID_DISPLAYS and has_z_index(properties)


def _has_translucent_opacity(properties: Mapping[str, str]) -> bool:
    opacity = parse_opacity(properties.get("opacity"))
    return opacity is not None and opacity < 1


def _has_clip_or_mask(properties: Mapping[str, str]) -> bool:
    return any(_present_and_not(properties, name, "none") for name in CLIP_MASK_PROPERTIES)


def _has_containment(properties: Mapping[str, str]) -> bool:
    value = _value(properties, "contain")
    if value is None:
        return False
    return not CONTAIN_VALUES.isdisjoint(value.split())


def _has_will_change_trigger(properties: Mapping[str, str]) -> bool:
    value = _value(properties, "will-change")
    if value is None:
        return False
    tokens = {token.strip() for token in value.split(",")}
    return not WILL_CHANGE_TRIGGERS.isdisjoint(tokens)


def creates_stacking_context(
    properties: Mapping[str, str], parent_display: str | None = None
) -> bool:
    """Decide whether the declared properties create a stacking context.

    `isolation` is not considered; see `isolation_is_isolate`.

    Args:
        properties: Lowercase property name to declared value.
        parent_display: Display value of the parent element, if known.

    Returns:
        True if any stacking-context trigger is satisfied.
    """
    return (
        has_position_and_z_index_stacking_context(properties)
        or _present_and_not(properties, "transform", "none")
        or _has_translucent_opacity(properties)
        or _present_and_not(properties, "filter", "none")
        or _present_and_not(properties, "backdrop-filter", "none")
        or _present_and_not(properties, "mix-blend-mode", "normal")
        or has_flex_or_grid_item_z_index_stacking_context(properties, parent_display)
        or _present_and_not(properties, "perspective", "none")
        or _has_clip_or_mask(properties)
        or _has_containment(properties)
        or _has_will_change_trigger(properties)
    )


def find_triggering_property(
    properties: Mapping[str, str], parent_display: str | None = None
) -> str | None:
    """Describe the declaration that creates the stacking context.

    Returns:
        Text such as ``"transform: rotate(2deg)"``, or None when no
        trigger is satisfied.
    """
    if has_position_and_z_index_stacking_context(properties):
        return f"position: {properties['position']} with z-index: {properties['z-index']}"
    if has_flex_or_grid_item_z_index_stacking_context(properties, parent_display):
        display = parent_display or getattr(properties, "parent_display", "")
        return f"z-index: {properties['z-index']} on a {display} item"
    if _has_translucent_opacity(properties):
        return f"opacity: {properties['opacity']}"

    for name, neutral in (
        ("transform", "none"),
        ("filter", "none"),
        ("backdrop-filter", "none"),
        ("mix-blend-mode", "normal"),
        ("perspective", "none"),
    ):
        if _present_and_not(properties, name, neutral):
            return f"{name}: {properties[name]}"

    for name in CLIP_MASK_PROPERTIES:
        if _present_and_not(properties, name, "none"):
            return f"{name}: {properties[name]}"

    if _has_containment(properties):
        return f"contain: {properties['contain']}"
    if _has_will_change_trigger(properties):
        return f"will-change: {properties['will-change']}"
    return None


def is_hack_opacity(value: str) -> bool:
    """Opacity in [0.99, 1): visually opaque, used only to force a context."""
    opacity = parse_opacity(value)
    return opacity is not None and HACK_OPACITY_MIN <= opacity < 1


def is_hack_transform(value: str) -> bool:
    return value.strip().lower() in HACK_TRANSFORMS


def is_hack_will_change(value: str) -> bool:
    text = value.lower()
    return any(token in text for token in HACK_WILL_CHANGE_TOKENS)
