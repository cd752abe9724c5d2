"""Table-driven utility class generator.

Every supported token maps to a fixed declaration block through lookup
tables; responsive (``md:``) and state (``hover:``) prefixes wrap the
base rule. Tokens the tables do not know produce ``None`` and are
dropped by callers.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Mapping

BREAKPOINTS: Mapping[str, str] = {
    "sm": "640px",
    "md": "768px",
    "lg": "1024px",
    "xl": "1280px",
    "2xl": "1536px",
}
BREAKPOINT_ORDER = ("", "sm", "md", "lg", "xl", "2xl")
STATES = ("hover", "focus", "active")

SPACING: Mapping[str, str] = {
    "0": "0px",
    "px": "1px",
    "0.5": "0.125rem",
    "1": "0.25rem",
    "1.5": "0.375rem",
    "2": "0.5rem",
    "2.5": "0.625rem",
    "3": "0.75rem",
    "3.5": "0.875rem",
    "4": "1rem",
    "5": "1.25rem",
    "6": "1.5rem",
    "7": "1.75rem",
    "8": "2rem",
    "9": "2.25rem",
    "10": "2.5rem",
    "11": "2.75rem",
    "12": "3rem",
    "14": "3.5rem",
    "16": "4rem",
    "20": "5rem",
    "24": "6rem",
    "28": "7rem",
    "32": "8rem",
    "36": "9rem",
    "40": "10rem",
    "48": "12rem",
    "56": "14rem",
    "64": "16rem",
    "72": "18rem",
    "80": "20rem",
    "96": "24rem",
}

SPACING_PROPERTIES: Mapping[str, tuple[str, ...]] = {
    "p": ("padding",),
    "px": ("padding-left", "padding-right"),
    "py": ("padding-top", "padding-bottom"),
    "pt": ("padding-top",),
    "pr": ("padding-right",),
    "pb": ("padding-bottom",),
    "pl": ("padding-left",),
    "m": ("margin",),
    "mx": ("margin-left", "margin-right"),
    "my": ("margin-top", "margin-bottom"),
    "mt": ("margin-top",),
    "mr": ("margin-right",),
    "mb": ("margin-bottom",),
    "ml": ("margin-left",),
    "gap": ("gap",),
    "gap-x": ("column-gap",),
    "gap-y": ("row-gap",),
    "top": ("top",),
    "right": ("right",),
    "bottom": ("bottom",),
    "left": ("left",),
    "inset": ("inset",),
}

SIZES: Mapping[str, str] = {
    "full": "100%",
    "auto": "auto",
    "1/2": "50%",
    "1/3": "33.333333%",
    "2/3": "66.666667%",
    "1/4": "25%",
    "3/4": "75%",
    "fit": "fit-content",
}

MAX_WIDTHS: Mapping[str, str] = {
    "xs": "20rem",
    "sm": "24rem",
    "md": "28rem",
    "lg": "32rem",
    "xl": "36rem",
    "2xl": "42rem",
    "3xl": "48rem",
    "4xl": "56rem",
    "5xl": "64rem",
    "6xl": "72rem",
    "7xl": "80rem",
    "full": "100%",
    "none": "none",
    "prose": "65ch",
}

FONT_SIZES: Mapping[str, tuple[str, str]] = {
    "xs": ("0.75rem", "1rem"),
    "sm": ("0.875rem", "1.25rem"),
    "base": ("1rem", "1.5rem"),
    "lg": ("1.125rem", "1.75rem"),
    "xl": ("1.25rem", "1.75rem"),
    "2xl": ("1.5rem", "2rem"),
    "3xl": ("1.875rem", "2.25rem"),
    "4xl": ("2.25rem", "2.5rem"),
    "5xl": ("3rem", "1"),
    "6xl": ("3.75rem", "1"),
    "7xl": ("4.5rem", "1"),
}

FONT_WEIGHTS: Mapping[str, str] = {
    "light": "300",
    "normal": "400",
    "medium": "500",
    "semibold": "600",
    "bold": "700",
    "extrabold": "800",
    "black": "900",
}

FONT_FAMILIES: Mapping[str, str] = {
    "sans": "ui-sans-serif,system-ui,-apple-system,\"Segoe UI\",Roboto,sans-serif",
    "serif": "ui-serif,Georgia,Cambria,\"Times New Roman\",serif",
    "mono": "ui-monospace,SFMono-Regular,Menlo,monospace",
    "theme": "var(--font-family)",
}

LEADING: Mapping[str, str] = {
    "none": "1",
    "tight": "1.25",
    "snug": "1.375",
    "normal": "1.5",
    "relaxed": "1.625",
    "loose": "2",
}

TRACKING: Mapping[str, str] = {
    "tighter": "-0.05em",
    "tight": "-0.025em",
    "normal": "0em",
    "wide": "0.025em",
    "wider": "0.05em",
    "widest": "0.1em",
}

TEXT_ALIGN = ("left", "center", "right", "justify", "start", "end")

RADII: Mapping[str, str] = {
    "": "0.25rem",
    "none": "0px",
    "sm": "0.125rem",
    "md": "0.375rem",
    "lg": "0.5rem",
    "xl": "0.75rem",
    "2xl": "1rem",
    "3xl": "1.5rem",
    "full": "9999px",
}

BORDER_WIDTHS: Mapping[str, str] = {"": "1px", "0": "0px", "2": "2px", "4": "4px", "8": "8px"}
BORDER_SIDES: Mapping[str, str] = {"t": "top", "r": "right", "b": "bottom", "l": "left"}

SHADOWS: Mapping[str, str] = {
    "": "0 1px 3px 0 rgb(0 0 0 / 0.1),0 1px 2px -1px rgb(0 0 0 / 0.1)",
    "sm": "0 1px 2px 0 rgb(0 0 0 / 0.05)",
    "md": "0 4px 6px -1px rgb(0 0 0 / 0.1),0 2px 4px -2px rgb(0 0 0 / 0.1)",
    "lg": "0 10px 15px -3px rgb(0 0 0 / 0.1),0 4px 6px -4px rgb(0 0 0 / 0.1)",
    "xl": "0 20px 25px -5px rgb(0 0 0 / 0.1),0 8px 10px -6px rgb(0 0 0 / 0.1)",
    "2xl": "0 25px 50px -12px rgb(0 0 0 / 0.25)",
    "none": "0 0 #0000",
}

OPACITY: Mapping[str, str] = {
    "0": "0",
    "5": "0.05",
    "10": "0.1",
    "20": "0.2",
    "25": "0.25",
    "30": "0.3",
    "40": "0.4",
    "50": "0.5",
    "60": "0.6",
    "70": "0.7",
    "75": "0.75",
    "80": "0.8",
    "90": "0.9",
    "95": "0.95",
    "100": "1",
}

BLUR: Mapping[str, str] = {"sm": "4px", "": "8px", "md": "12px", "lg": "16px", "xl": "24px"}

DURATIONS = ("75", "100", "150", "200", "300", "500", "700", "1000")

GRADIENT_DIRECTIONS: Mapping[str, str] = {
    "t": "to top",
    "tr": "to top right",
    "r": "to right",
    "br": "to bottom right",
    "b": "to bottom",
    "bl": "to bottom left",
    "l": "to left",
    "tl": "to top left",
}

_SHADES = ("50", "100", "200", "300", "400", "500", "600", "700", "800", "900")
_PALETTE_ROWS: Mapping[str, tuple[str, ...]] = {
    "gray": ("#f9fafb", "#f3f4f6", "#e5e7eb", "#d1d5db", "#9ca3af", "#6b7280", "#4b5563", "#374151", "#1f2937", "#111827"),
    "red": ("#fef2f2", "#fee2e2", "#fecaca", "#fca5a5", "#f87171", "#ef4444", "#dc2626", "#b91c1c", "#991b1b", "#7f1d1d"),
    "orange": ("#fff7ed", "#ffedd5", "#fed7aa", "#fdba74", "#fb923c", "#f97316", "#ea580c", "#c2410c", "#9a3412", "#7c2d12"),
    "yellow": ("#fefce8", "#fef9c3", "#fef08a", "#fde047", "#facc15", "#eab308", "#ca8a04", "#a16207", "#854d0e", "#713f12"),
    "green": ("#f0fdf4", "#dcfce7", "#bbf7d0", "#86efac", "#4ade80", "#22c55e", "#16a34a", "#15803d", "#166534", "#14532d"),
    "blue": ("#eff6ff", "#dbeafe", "#bfdbfe", "#93c5fd", "#60a5fa", "#3b82f6", "#2563eb", "#1d4ed8", "#1e40af", "#1e3a8a"),
    "indigo": ("#eef2ff", "#e0e7ff", "#c7d2fe", "#a5b4fc", "#818cf8", "#6366f1", "#4f46e5", "#4338ca", "#3730a3", "#312e81"),
    "purple": ("#faf5ff", "#f3e8ff", "#e9d5ff", "#d8b4fe", "#c084fc", "#a855f7", "#9333ea", "#7e22ce", "#6b21a8", "#581c87"),
    "pink": ("#fdf2f8", "#fce7f3", "#fbcfe8", "#f9a8d4", "#f472b6", "#ec4899", "#db2777", "#be185d", "#9d174d", "#831843"),
}
PALETTE: Mapping[str, str] = {
    f"{name}-{shade}": hex_value
    for name, row in _PALETTE_ROWS.items()
    for shade, hex_value in zip(_SHADES, row)
}
NAMED_COLORS: Mapping[str, str] = {
    "white": "#ffffff",
    "black": "#000000",
    "transparent": "transparent",
    "current": "currentColor",
    "primary": "var(--primary-color)",
    "secondary": "var(--secondary-color)",
    "background": "var(--background-color)",
}

STATIC: Mapping[str, str] = {
    "block": "display:block",
    "inline-block": "display:inline-block",
    "inline": "display:inline",
    "flex": "display:flex",
    "inline-flex": "display:inline-flex",
    "grid": "display:grid",
    "hidden": "display:none",
    "contents": "display:contents",
    "flex-row": "flex-direction:row",
    "flex-row-reverse": "flex-direction:row-reverse",
    "flex-col": "flex-direction:column",
    "flex-col-reverse": "flex-direction:column-reverse",
    "flex-wrap": "flex-wrap:wrap",
    "flex-nowrap": "flex-wrap:nowrap",
    "flex-1": "flex:1 1 0%",
    "flex-auto": "flex:1 1 auto",
    "flex-none": "flex:none",
    "grow": "flex-grow:1",
    "shrink-0": "flex-shrink:0",
    "items-start": "align-items:flex-start",
    "items-center": "align-items:center",
    "items-end": "align-items:flex-end",
    "items-stretch": "align-items:stretch",
    "items-baseline": "align-items:baseline",
    "justify-start": "justify-content:flex-start",
    "justify-center": "justify-content:center",
    "justify-end": "justify-content:flex-end",
    "justify-between": "justify-content:space-between",
    "justify-around": "justify-content:space-around",
    "justify-evenly": "justify-content:space-evenly",
    "self-start": "align-self:flex-start",
    "self-center": "align-self:center",
    "self-end": "align-self:flex-end",
    "content-center": "align-content:center",
    "place-items-center": "place-items:center",
    "order-first": "order:-9999",
    "order-last": "order:9999",
    "static": "position:static",
    "relative": "position:relative",
    "absolute": "position:absolute",
    "fixed": "position:fixed",
    "sticky": "position:sticky",
    "overflow-hidden": "overflow:hidden",
    "overflow-auto": "overflow:auto",
    "overflow-x-auto": "overflow-x:auto",
    "overflow-y-auto": "overflow-y:auto",
    "w-screen": "width:100vw",
    "h-screen": "height:100vh",
    "min-h-screen": "min-height:100vh",
    "min-h-full": "min-height:100%",
    "min-w-0": "min-width:0px",
    "uppercase": "text-transform:uppercase",
    "lowercase": "text-transform:lowercase",
    "capitalize": "text-transform:capitalize",
    "normal-case": "text-transform:none",
    "italic": "font-style:italic",
    "not-italic": "font-style:normal",
    "underline": "text-decoration-line:underline",
    "line-through": "text-decoration-line:line-through",
    "no-underline": "text-decoration-line:none",
    "whitespace-nowrap": "white-space:nowrap",
    "whitespace-pre-line": "white-space:pre-line",
    "break-words": "overflow-wrap:break-word",
    "truncate": "overflow:hidden;text-overflow:ellipsis;white-space:nowrap",
    "antialiased": "-webkit-font-smoothing:antialiased;-moz-osx-font-smoothing:grayscale",
    "list-none": "list-style-type:none",
    "list-disc": "list-style-type:disc",
    "list-inside": "list-style-position:inside",
    "object-cover": "object-fit:cover",
    "object-contain": "object-fit:contain",
    "object-center": "object-position:center",
    "aspect-square": "aspect-ratio:1/1",
    "aspect-video": "aspect-ratio:16/9",
    "cursor-pointer": "cursor:pointer",
    "select-none": "user-select:none",
    "pointer-events-none": "pointer-events:none",
    "border-solid": "border-style:solid",
    "border-dashed": "border-style:dashed",
    "border-none": "border-style:none",
    "outline-none": "outline:2px solid transparent;outline-offset:2px",
    "transition": (
        "transition-property:color,background-color,border-color,text-decoration-color,fill,stroke,opacity,"
        "box-shadow,transform,filter,backdrop-filter;"
        "transition-timing-function:cubic-bezier(0.4,0,0.2,1);transition-duration:150ms"
    ),
    "transition-all": "transition-property:all;transition-timing-function:cubic-bezier(0.4,0,0.2,1);transition-duration:150ms",
    "transition-colors": (
        "transition-property:color,background-color,border-color,text-decoration-color,fill,stroke;"
        "transition-timing-function:cubic-bezier(0.4,0,0.2,1);transition-duration:150ms"
    ),
    "transition-transform": "transition-property:transform;transition-timing-function:cubic-bezier(0.4,0,0.2,1);transition-duration:150ms",
    "transition-opacity": "transition-property:opacity;transition-timing-function:cubic-bezier(0.4,0,0.2,1);transition-duration:150ms",
    "ease-in": "transition-timing-function:cubic-bezier(0.4,0,1,1)",
    "ease-out": "transition-timing-function:cubic-bezier(0,0,0.2,1)",
    "ease-in-out": "transition-timing-function:cubic-bezier(0.4,0,0.2,1)",
    "scale-95": "transform:scale(.95)",
    "scale-100": "transform:scale(1)",
    "scale-105": "transform:scale(1.05)",
    "scale-110": "transform:scale(1.1)",
    "-translate-y-1": "transform:translateY(-0.25rem)",
    "rotate-180": "transform:rotate(180deg)",
    "sr-only": (
        "position:absolute;width:1px;height:1px;padding:0;margin:-1px;overflow:hidden;"
        "clip:rect(0,0,0,0);white-space:nowrap;border-width:0"
    ),
    "container": "width:100%;margin-left:auto;margin-right:auto",
}

_ESCAPE_RE = re.compile(r"([:./%\[\]#()!,])")
_COLOR_PREFIXES: Mapping[str, str] = {
    "text": "color",
    "bg": "background-color",
    "border": "border-color",
}


@dataclass(frozen=True, slots=True)
class UtilityRule:
    """One generated rule for a single class token."""

    token: str
    breakpoint: str
    state: str
    declarations: str
    selector_suffix: str = ""

    @property
    def selector(self) -> str:
        selector = "." + escape_class(self.token)
        if self.state:
            selector += f":{self.state}"
        return selector + self.selector_suffix

    def render(self) -> str:
        return f"{self.selector}{{{self.declarations}}}"

    @property
    def sort_key(self) -> tuple[int, int, str]:
        return (
            BREAKPOINT_ORDER.index(self.breakpoint),
            STATES.index(self.state) + 1 if self.state else 0,
            self.token,
        )


def escape_class(token: str) -> str:
    """Escape a class token for use in a CSS selector (``md:p-4`` -> ``md\\:p-4``)."""
    escaped = _ESCAPE_RE.sub(r"\\\1", token)
    if escaped[:1].isdigit():
        escaped = f"\\3{escaped[0]} {escaped[1:]}"
    return escaped


def rule_for(token: str) -> UtilityRule | None:
    """Return the rule for ``token`` or ``None`` when any part is unknown."""
    if not token:
        return None
    *prefixes, base = token.split(":")
    breakpoint = ""
    state = ""
    for prefix in prefixes:
        if prefix in BREAKPOINTS and not breakpoint and not state:
            breakpoint = prefix
        elif prefix in STATES and not state:
            state = prefix
        else:
            return None
    generated = _base_declarations(base)
    if generated is None:
        return None
    declarations, suffix = generated
    return UtilityRule(token, breakpoint, state, declarations, suffix)


def _base_declarations(base: str) -> tuple[str, str] | None:
    if base in STATIC:
        return STATIC[base], ""
    if base.startswith("space-y-") or base.startswith("space-x-"):
        value = SPACING.get(base[8:])
        if value is None:
            return None
        prop = "margin-top" if base[6] == "y" else "margin-left"
        return f"{prop}:{value}", ">:not([hidden])~:not([hidden])"
    for handler in _HANDLERS:
        declarations = handler(base)
        if declarations is not None:
            return declarations, ""
    return None


def _spacing(base: str) -> str | None:
    negative = base.startswith("-")
    if negative:
        base = base[1:]
    prefix, _, key = base.rpartition("-")
    if prefix not in SPACING_PROPERTIES:
        return None
    if key == "auto" and not negative and (prefix.startswith("m") or prefix in ("top", "right", "bottom", "left", "inset")):
        value = "auto"
    elif key in SPACING:
        value = SPACING[key]
        if negative:
            if prefix.startswith("p") or prefix.startswith("gap"):
                return None
            value = f"-{value}"
    else:
        return None
    return ";".join(f"{prop}:{value}" for prop in SPACING_PROPERTIES[prefix])


def _sizing(base: str) -> str | None:
    for prefix, prop in (("min-w-", "min-width"), ("min-h-", "min-height"), ("w-", "width"), ("h-", "height")):
        if base.startswith(prefix):
            key = base[len(prefix):]
            value = SIZES.get(key) or SPACING.get(key)
            return f"{prop}:{value}" if value else None
    if base.startswith("max-w-"):
        value = MAX_WIDTHS.get(base[6:])
        return f"max-width:{value}" if value else None
    if base.startswith("max-h-"):
        value = SPACING.get(base[6:])
        return f"max-height:{value}" if value else None
    return None


def _typography(base: str) -> str | None:
    if base.startswith("text-"):
        key = base[5:]
        if key in TEXT_ALIGN:
            return f"text-align:{key}"
        if key in FONT_SIZES:
            size, line_height = FONT_SIZES[key]
            return f"font-size:{size};line-height:{line_height}"
        return None
    if base.startswith("font-"):
        key = base[5:]
        if key in FONT_WEIGHTS:
            return f"font-weight:{FONT_WEIGHTS[key]}"
        if key in FONT_FAMILIES:
            return f"font-family:{FONT_FAMILIES[key]}"
        return None
    if base.startswith("leading-") and base[8:] in LEADING:
        return f"line-height:{LEADING[base[8:]]}"
    if base.startswith("tracking-") and base[9:] in TRACKING:
        return f"letter-spacing:{TRACKING[base[9:]]}"
    if base.startswith("line-clamp-") and base[11:] in ("1", "2", "3", "4"):
        return f"overflow:hidden;display:-webkit-box;-webkit-box-orient:vertical;-webkit-line-clamp:{base[11:]}"
    return None


def _color(base: str) -> str | None:
    prefix, _, rest = base.partition("-")
    if prefix == "from" or prefix == "via" or prefix == "to":
        value = resolve_color(rest)
        if value is None:
            return None
        if prefix == "from":
            return (
                f"--tw-gradient-from:{value};--tw-gradient-to:rgb(255 255 255 / 0);"
                "--tw-gradient-stops:var(--tw-gradient-from),var(--tw-gradient-to)"
            )
        if prefix == "via":
            return (
                f"--tw-gradient-to:rgb(255 255 255 / 0);"
                f"--tw-gradient-stops:var(--tw-gradient-from),{value},var(--tw-gradient-to)"
            )
        return f"--tw-gradient-to:{value}"
    prop = _COLOR_PREFIXES.get(prefix)
    if prop is None:
        return None
    value = resolve_color(rest)
    return f"{prop}:{value}" if value else None


def resolve_color(name: str) -> str | None:
    """Resolve ``blue-600`` / ``white/10`` / ``primary`` to a CSS color value."""
    name, _, alpha = name.partition("/")
    value = NAMED_COLORS.get(name) or PALETTE.get(name)
    if value is None:
        return None
    if not alpha:
        return value
    if alpha not in OPACITY or not value.startswith("#"):
        return None
    red, green, blue = (int(value[index:index + 2], 16) for index in (1, 3, 5))
    return f"rgb({red} {green} {blue} / {OPACITY[alpha]})"


def _borders(base: str) -> str | None:
    if base == "rounded" or base.startswith("rounded-"):
        key = base[8:]
        for side, corners in (("t", ("top-left", "top-right")), ("b", ("bottom-left", "bottom-right"))):
            if key == side or key.startswith(f"{side}-"):
                radius = RADII.get(key[2:])
                if radius is None:
                    return None
                return ";".join(f"border-{corner}-radius:{radius}" for corner in corners)
        radius = RADII.get(key)
        return f"border-radius:{radius}" if radius is not None else None
    if base == "border" or base.startswith("border-"):
        key = base[7:]
        if key in BORDER_WIDTHS:
            return f"border-width:{BORDER_WIDTHS[key]}"
        side, _, width = key.partition("-")
        if side in BORDER_SIDES and width in BORDER_WIDTHS:
            return f"border-{BORDER_SIDES[side]}-width:{BORDER_WIDTHS[width]}"
        return None
    return None


def _effects(base: str) -> str | None:
    if base == "shadow" or base.startswith("shadow-"):
        shadow = SHADOWS.get(base[7:])
        return f"box-shadow:{shadow}" if shadow else None
    if base.startswith("opacity-") and base[8:] in OPACITY:
        return f"opacity:{OPACITY[base[8:]]}"
    if base == "backdrop-blur" or base.startswith("backdrop-blur-"):
        blur = BLUR.get(base[14:])
        return f"backdrop-filter:blur({blur})" if blur else None
    if base == "blur" or base.startswith("blur-"):
        blur = BLUR.get(base[5:])
        return f"filter:blur({blur})" if blur else None
    if base.startswith("bg-gradient-to-"):
        direction = GRADIENT_DIRECTIONS.get(base[15:])
        return f"background-image:linear-gradient({direction},var(--tw-gradient-stops))" if direction else None
    if base.startswith("duration-") and base[9:] in DURATIONS:
        return f"transition-duration:{base[9:]}ms"
    if base.startswith("z-") and base[2:] in ("0", "10", "20", "30", "40", "50"):
        return f"z-index:{base[2:]}"
    return None


def _grid(base: str) -> str | None:
    if base == "col-span-full":
        return "grid-column:1/-1"
    for prefix, template in (
        ("grid-cols-", "grid-template-columns:repeat({n},minmax(0,1fr))"),
        ("grid-rows-", "grid-template-rows:repeat({n},minmax(0,1fr))"),
        ("col-span-", "grid-column:span {n}/span {n}"),
        ("order-", "order:{n}"),
    ):
        if base.startswith(prefix):
            count = base[len(prefix):]
            if count.isdigit() and 1 <= int(count) <= 12:
                return template.format(n=count)
            return None
    return None


_HANDLERS = (_spacing, _sizing, _typography, _effects, _borders, _grid, _color)


__all__ = [
    "BREAKPOINTS",
    "BREAKPOINT_ORDER",
    "STATES",
    "UtilityRule",
    "escape_class",
    "resolve_color",
    "rule_for",
]
