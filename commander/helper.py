"""
Help rendering for a Commander (Rich-based, color-aware).

Renderables
- render_usage(commander): every category with its commands and, for structured
  commands, their flags; followed by a usage line.
- render_command(commander, category, command): detail for a single command.
- render_error(commander, message): a single error line (used by help mode).

Palette keys
- title, category, command-name, command-description
- flag-name, type-hint, flag-usage, default
- detail-title, detail-label, usage-label, usage-line, error, panel-title

Customization
- Define a mapping named __styles__ in __main__ to override any palette entry.
- When colorful is False, styling is suppressed entirely.
- When fancy is True, full usage and command detail are framed in a panel.
"""
from collections import defaultdict

from rich.console import Group
from rich.panel import Panel
from rich.text import Text

from .kinds import Kind

_PALETTE = {
    # === Head sections ===
    "title": "bold #00E6FF",  # CYAN headline
    "category": "bold #FFD600",  # AMBER category labels

    # === Commands ===
    "command-name": "bold #22C55E",  # GREEN command names
    "command-description": "",

    # === Flags ===
    "flag-name": "#00E6FF",  # CYAN for flags
    "type-hint": "#9CA3AF",  # Muted gray
    "flag-usage": "",
    "default": "#FFD600",  # AMBER defaults

    # === Detail / footer ===
    "detail-title": "bold #00E6FF",
    "detail-label": "bold #FF4D94",  # MAGENTA-PINK labels
    "usage-label": "bold #FF4D94",
    "usage-line": "#36C5F0",  # SKY-BLUE
    "error": "#EF4444",  # RED

    # === Fancy panel ===
    "panel-title": "bold #FF4D94",
}


def _palette(commander):
    styles = defaultdict(str, _PALETTE | getattr(__import__("__main__"), "__styles__", {}))

    def styler(style):
        return styles[style] if commander.colorful else ""

    def text(fragment, style=""):
        if not fragment:
            return Text("")
        if not commander.colorful:
            return Text(str(fragment))
        if isinstance(fragment, Text):
            return fragment
        return Text(str(fragment), style)

    return styler, text


def _framed(commander, renderable, title):
    if not commander.fancy:
        return renderable
    styler, text = _palette(commander)
    return Panel(
        renderable,
        title=Text.assemble("[ ", text(title.upper(), styler("panel-title")), " ]"),
        title_align="left",
    )


def _fields(commander, command, indent):
    """
    one line per flag: --name <type>  usage (default: value)
    """
    styler, text = _palette(commander)
    lines = []
    for field in command.fields:
        line = Text(" " * indent)
        line.append(text("--" + field.name, styler("flag-name")))
        if field.kind is not Kind.BOOL:
            line.append(" ").append(text("<%s>" % field.kind.typename, styler("type-hint")))
        if field.usage:
            line.append("  ").append(text(field.usage, styler("flag-usage")))
        if field.default:
            line.append(" ").append(text("(default: %s)" % field.default, styler("default")))
        lines.append(line)
    return lines


def render_usage(commander, /):
    styler, text = _palette(commander)
    renders = [text("🚀 Available Commands:", styler("title"))]

    for category in commander.registry:
        renders.append(Text(""))
        renders.append(text("📁 " + category.name, styler("category")))
        for command in category:
            line = Text("  ")
            line.append(text(command.name.ljust(12), styler("command-name")))
            if command.descr:
                line.append(" ").append(text(command.descr, styler("command-description")))
            renders.append(line)
            renders.extend(_fields(commander, command, 4))

    renders.append(Text(""))
    renders.append(text("💡 Usage:", styler("usage-label")))
    renders.append(Text.assemble("  ", text("%s command [flags]" % commander.prog, styler("usage-line"))))

    return _framed(commander, Group(*renders), "%s help" % commander.prog)


def render_command(commander, category, command, /):
    styler, text = _palette(commander)
    renders = [
        Text(""),
        Text.assemble(
            text("Help for command ", styler("detail-title")),
            text(repr(command.name), styler("command-name")),
            text(" in category ", styler("detail-title")),
            text(repr(category.name), styler("category")),
            text(":", styler("detail-title")),
        ),
    ]
    if command.descr:
        renders.append(Text.assemble(text("Description:", styler("detail-label")), " ", text(command.descr)))
    suffix = " [flags]" if command.fields else ""
    renders.append(Text.assemble(
        text("Usage:", styler("detail-label")), " ",
        text("%s %s%s" % (commander.prog, command.name, suffix), styler("usage-line")),
    ))
    if command.fields:
        renders.append(text("Flags:", styler("detail-label")))
        renders.extend(_fields(commander, command, 2))

    return _framed(commander, Group(*renders), "%s help" % command.name)


def render_error(commander, message, /):
    styler, text = _palette(commander)
    return text(message, styler("error"))


__all__ = (
    "render_usage",
    "render_command",
    "render_error",
)
