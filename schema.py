# schema.py
from typing import List
from pydantic import BaseModel, ConfigDict, Field, field_validator

OPTIMIZATION_GOALS = (
    "Fastest to ship",
    "Cheapest",
    "Most scalable",
    "Beginner-friendly",
)
DEFAULT_GOAL = OPTIMIZATION_GOALS[0]


class _WireModel(BaseModel):
    # attribute names are snake_case, the wire format is camelCase
    model_config = ConfigDict(populate_by_name=True)


# ---------- Request ----------
class RecommendationRequest(_WireModel):
    idea_description: str = Field(..., alias="ideaDescription")
    optimization_goal: str = Field(DEFAULT_GOAL, alias="optimizationGoal")

    @field_validator("optimization_goal")
    @classmethod
    def _known_goal(cls, v: str) -> str:
        if v not in OPTIMIZATION_GOALS:
            raise ValueError(f"optimization goal must be one of {OPTIMIZATION_GOALS}")
        return v


# ---------- Response ----------
class ToolEntry(BaseModel):
    name: str
    category: str
    description: str


class AvoidEntry(BaseModel):
    tool: str
    reason: str


class MvpCutLine(_WireModel):
    must_build: List[str] = Field(..., alias="mustBuild")
    must_cut: List[str] = Field(..., alias="mustCut")


class RecommendationResponse(_WireModel):
    classification: str
    build_approach: str = Field(..., alias="buildApproach")
    stack: List[ToolEntry]
    what_not_to_use: List[AvoidEntry] = Field(..., alias="whatNotToUse")
    mvp_cut_line: MvpCutLine = Field(..., alias="mvpCutLine")
    common_mistake: str = Field(..., alias="commonMistake")
    why_this_stack_wins: List[str] = Field(..., alias="whyThisStackWins")

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True)


# ---------- Structured output schema (sent with every request) ----------
def _string(description: str = "") -> dict:
    d = {"type": "STRING"}
    if description:
        d["description"] = description
    return d


def _string_list(description: str) -> dict:
    return {"type": "ARRAY", "items": {"type": "STRING"}, "description": description}


RESPONSE_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "classification": _string("One line classification of product type and audience."),
        "buildApproach": _string("The single best build approach (e.g., Code, Low-code, No-code)."),
        "stack": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "name": _string("Name of the tool."),
                    "category": _string("Category (Frontend, Backend, Database, Hosting, Collab)."),
                    "description": _string("Why this choice was made (one short sentence)."),
                },
                "required": ["name", "category", "description"],
            },
        },
        "whatNotToUse": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "tool": _string("Name of the tool to avoid."),
                    "reason": _string("Why it is a bad choice."),
                },
                "required": ["tool", "reason"],
            },
        },
        "mvpCutLine": {
            "type": "OBJECT",
            "properties": {
                "mustBuild": _string_list("Features that MUST be built for v1."),
                "mustCut": _string_list("Features that MUST be cut for v1."),
            },
            "required": ["mustBuild", "mustCut"],
        },
        "commonMistake": _string("The single biggest mistake someone building this would make."),
        "whyThisStackWins": _string_list(
            "2-3 short bullet points explaining why this stack is better than "
            "alternatives under the chosen constraint."
        ),
    },
    "required": [
        "classification",
        "buildApproach",
        "stack",
        "whatNotToUse",
        "mvpCutLine",
        "commonMistake",
        "whyThisStackWins",
    ],
}


def to_json_schema(schema: dict) -> dict:
    """
    Convert the Gemini-style schema into strict JSON Schema
    (lowercase types, no extra properties) for OpenAI structured output.
    """
    out = {}
    for key, value in schema.items():
        if key == "type":
            out["type"] = value.lower()
        elif key == "properties":
            out["properties"] = {k: to_json_schema(v) for k, v in value.items()}
        elif key == "items":
            out["items"] = to_json_schema(value)
        else:
            out[key] = value
    if out.get("type") == "object":
        out["additionalProperties"] = False
    return out
