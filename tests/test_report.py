# =============================================
# File: tests/test_report.py
# Purpose: Category icons and report section mapping
# =============================================
import sys, os
sys.path.append(os.path.dirname(os.path.dirname(__file__)))

import pytest

from report import (
    BACKEND,
    CATEGORY_ICONS,
    COMPUTE,
    DATABASE,
    FRONTEND,
    GENERIC,
    LANGUAGE,
    OPS,
    build_report,
    icon_for_category,
    to_markdown,
)
from schema import RecommendationResponse


@pytest.mark.parametrize("category,icon", [
    ("Frontend", FRONTEND),
    ("FRONT-END", FRONTEND),
    ("Backend", BACKEND),
    ("Public API", BACKEND),
    ("Database", DATABASE),
    ("Object Store", DATABASE),
    ("DevOps", OPS),
    ("Cloud", OPS),
    ("AI Infra", COMPUTE),
    ("ML pipeline", COMPUTE),
    ("Language", LANGUAGE),
    ("Hosting", GENERIC),
    ("Team collab", GENERIC),
    ("", GENERIC),
])
def test_icon_for_category(category, icon):
    assert icon_for_category(category) == icon


def test_first_bucket_wins():
    # "Backend data" hits both back and data; back is checked first
    assert icon_for_category("Backend data") == BACKEND
    assert icon_for_category("Frontend API") == FRONTEND


def test_bucket_order():
    assert [icon.name for _, icon in CATEGORY_ICONS] == [
        "frontend", "backend", "database", "ops", "compute", "language",
    ]


def test_build_report_order_and_content(sample_doc):
    result = RecommendationResponse.model_validate(sample_doc)
    sections = build_report(result)
    assert [s.kind for s in sections] == [
        "header", "stack", "avoid", "mvp_cut_line", "common_mistake", "why_this_stack_wins",
    ]
    header, stack, avoid, cut, mistake, why = sections
    assert header.title == "Approach: Code"
    assert header.body == sample_doc["classification"]
    assert [c["name"] for c in stack.body] == [t["name"] for t in sample_doc["stack"]]
    assert stack.body[0]["icon"] == FRONTEND
    assert stack.body[2]["icon"] == DATABASE
    assert avoid.body == [("Kubernetes", "Operational overhead with no users yet."),
                          ("Microservices", "One team, one deployable.")]
    assert cut.body == {"must_build": sample_doc["mvpCutLine"]["mustBuild"],
                        "must_cut": sample_doc["mvpCutLine"]["mustCut"]}
    assert mistake.body == sample_doc["commonMistake"]
    assert why.body == [(1, sample_doc["whyThisStackWins"][0]), (2, sample_doc["whyThisStackWins"][1])]


def test_to_markdown(sample_doc):
    md = to_markdown(RecommendationResponse.model_validate(sample_doc), goal="Cheapest")
    assert md.startswith("## Tech Stack Recommendation\n**Primary goal:** Cheapest")
    assert "**Approach: Code**" in md
    assert "- 🌐 **Next.js** (Frontend): Fast to scaffold and deploy." in md
    assert "- **Kubernetes**: Operational overhead with no users yet." in md
    assert "- ~~Video chat~~" in md
    assert '> "Building a custom CRDT engine before anyone draws a single box."' in md
    assert "2. One deploy target keeps shipping fast." in md
    assert md.index("### Recommended Stack") < md.index("### What Not To Use") < md.index("### MVP Cut Line")
