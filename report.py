# report.py: data -> view mapping for a recommendation
from typing import Any, List, NamedTuple, Optional, Tuple

from schema import RecommendationResponse


class Icon(NamedTuple):
    name: str
    glyph: str


FRONTEND = Icon("frontend", "🌐")
BACKEND = Icon("backend", "🖥️")
DATABASE = Icon("database", "🗄️")
OPS = Icon("ops", "⌨️")
COMPUTE = Icon("compute", "🧠")
LANGUAGE = Icon("language", "🧑‍💻")
GENERIC = Icon("generic", "🧩")

# Evaluated top to bottom; first bucket with a matching keyword wins.
CATEGORY_ICONS: List[Tuple[Tuple[str, ...], Icon]] = [
    (("front",), FRONTEND),
    (("back", "api"), BACKEND),
    (("data", "store"), DATABASE),
    (("devops", "cloud"), OPS),
    (("ai", "ml"), COMPUTE),
    (("language",), LANGUAGE),
]


def icon_for_category(category: str) -> Icon:
    low = (category or "").lower()
    for keywords, icon in CATEGORY_ICONS:
        if any(k in low for k in keywords):
            return icon
    return GENERIC


class Section(NamedTuple):
    kind: str
    title: str
    body: Any


def build_report(result: RecommendationResponse) -> List[Section]:
    """
    Sections in render order:
      header, stack, avoid, mvp_cut_line, common_mistake, why_this_stack_wins
    """
    cards = [
        {
            "name": t.name,
            "category": t.category,
            "description": t.description,
            "icon": icon_for_category(t.category),
        }
        for t in result.stack
    ]
    return [
        Section("header", f"Approach: {result.build_approach}", result.classification),
        Section("stack", "Recommended Stack", cards),
        Section("avoid", "What Not To Use", [(a.tool, a.reason) for a in result.what_not_to_use]),
        Section(
            "mvp_cut_line",
            "MVP Cut Line",
            {
                "must_build": list(result.mvp_cut_line.must_build),
                "must_cut": list(result.mvp_cut_line.must_cut),
            },
        ),
        Section("common_mistake", "#1 Rookie Mistake", result.common_mistake),
        Section(
            "why_this_stack_wins",
            "Why This Stack Wins For You",
            [(i, point) for i, point in enumerate(result.why_this_stack_wins, start=1)],
        ),
    ]


def to_markdown(result: RecommendationResponse, goal: Optional[str] = None) -> str:
    """Plain Markdown version of the report for download."""
    lines = ["## Tech Stack Recommendation"]
    if goal:
        lines.append(f"**Primary goal:** {goal}")
    for section in build_report(result):
        if section.kind == "header":
            lines += [f"**{section.title}**", "", section.body]
        elif section.kind == "stack":
            lines += ["", f"### {section.title}"]
            for c in section.body:
                lines.append(f"- {c['icon'].glyph} **{c['name']}** ({c['category']}): {c['description']}")
        elif section.kind == "avoid":
            lines += ["", f"### {section.title}"]
            lines += [f"- **{tool}**: {reason}" for tool, reason in section.body]
        elif section.kind == "mvp_cut_line":
            lines += ["", f"### {section.title}", "", "**Must Build (v1)**"]
            lines += [f"- {item}" for item in section.body["must_build"]]
            lines += ["", "**Must Cut (Wait for v2)**"]
            lines += [f"- ~~{item}~~" for item in section.body["must_cut"]]
        elif section.kind == "common_mistake":
            lines += ["", f"### {section.title}", f'> "{section.body}"']
        elif section.kind == "why_this_stack_wins":
            lines += ["", f"### {section.title}"]
            lines += [f"{i}. {point}" for i, point in section.body]
    return "\n".join(lines) + "\n"
