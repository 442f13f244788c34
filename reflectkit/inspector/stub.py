"""Render a stub outline of a type's public surface."""

from jinja2 import Environment, PackageLoader

from reflectkit.reflection import TypeDescriptor

from .summary import ParameterSummary, TypeSummary, summarize

env = Environment(
    loader=PackageLoader("reflectkit.inspector", "templates"),
    trim_blocks=True,
    lstrip_blocks=True,
    keep_trailing_newline=True,
    line_comment_prefix="%%",
    line_statement_prefix="%",
)

template = env.get_template("stub.pyi.j2")


def _parameter_list(params: list[ParameterSummary]) -> str:
    """Render parameters after ``self``, including the leading comma."""
    parts: list[str] = []
    keyword_only = False
    for p in params:
        if p.kind == "keyword" and not keyword_only:
            parts.append("*")
            keyword_only = True
        text = f"{p.name}: {p.type}"
        if p.default is not None:
            text += f" = {p.default}"
        parts.append(text)
    return "".join(f", {part}" for part in parts)


def render_summary(summary: TypeSummary) -> str:
    """Render a stub from an already built summary."""
    counts: dict[str, int] = {}
    for m in summary.methods:
        counts[m.name] = counts.get(m.name, 0) + 1

    is_empty = not (
        summary.fields
        or summary.events
        or summary.constructors
        or summary.properties
        or summary.methods
    )
    return template.render(
        summary=summary,
        parameter_list=_parameter_list,
        is_overloaded=lambda name: counts.get(name, 0) > 1,
        is_empty=is_empty,
        BLANK_LINE="",
    )


def render_stub(descriptor: TypeDescriptor, show_inherited: bool = True) -> str:
    """Render a ``.pyi``-style outline of ``descriptor``."""
    return render_summary(summarize(descriptor, show_inherited))
