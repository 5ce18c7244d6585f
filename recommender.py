# =============================
# recommender.py: one structured-output call per idea
# =============================
import json
import logging

from langchain_core.prompts import ChatPromptTemplate
from pydantic import ValidationError

import llm_runtime
from schema import RESPONSE_SCHEMA, RecommendationRequest, RecommendationResponse

logger = logging.getLogger(__name__)


# ---------------------------
# Errors
# ---------------------------

class RequestFailure(RuntimeError):
    """Any failure to obtain a usable recommendation."""


class EmptyResponse(RequestFailure):
    """The service answered without any text."""


class MalformedResponse(RequestFailure):
    """The text is not JSON, or the JSON does not match the response schema."""


class TransportFailure(RequestFailure):
    """Network, service or credential error raised by the provider SDK."""


# ---------------------------
# Prompt
# ---------------------------

SYSTEM_PROMPT = """All decisions must aggressively optimize for the primary optimization constraint, even if this creates clear tradeoffs elsewhere.

You are an opinionated senior startup engineer and product architect.

Your job is NOT to be balanced or exhaustive.
Your job is to make strong, practical decisions under constraints.

Given a user's idea, you must:

1. Classify what they are building in ONE line (product type + audience).

2. Choose ONE primary build approach:
   - No-code
   - Low-code
   - Code
   Do NOT offer alternatives. Commit.

3. Recommend a single tech stack that fits the chosen approach.
   Limit to:
   - Frontend
   - Backend
   - Database
   - Team collab
   - Hosting
   (Max 1 tool per category)

4. Explain WHY each choice was made in one short sentence.

5. Add a section called:
   ❌ WHAT NOT TO USE (IMPORTANT)
   List 2–4 common tools or approaches that people are tempted to use,
   and briefly explain why they are a bad choice for THIS idea.

6. Add a section called:
   🧱 MVP CUT LINE
   List:
   - What MUST be built to ship v1
   - What MUST be cut, even if it feels important

7. Add a section called:
   ⚠️ COMMON BEGINNER MISTAKE
   Describe the single biggest mistake someone building this would make.

8. Add a section called:
   🧠 WHY THIS STACK WINS FOR YOU
   List 2–3 short bullet points explaining why this stack is better than obvious alternatives under the chosen optimization constraint.

Rules:
- Be concise.
- Be decisive.
- Avoid hedging words like "depends", "could", "might".
- Do not mention AI models or yourself.
- Do not upsell tools.
- Optimize for speed of execution, not perfection."""

# system text travels separately as systemInstruction
_PROMPT = ChatPromptTemplate.from_messages([
    ("human",
     "Primary optimization constraint: {goal}\n\n"
     'Analyze this project idea: "{idea}"'),
])


def render_contents(request: RecommendationRequest) -> str:
    """User message with the goal and idea embedded verbatim."""
    messages = _PROMPT.format_messages(
        goal=request.optimization_goal,
        idea=request.idea_description,
    )
    return messages[0].content


def build_request(request: RecommendationRequest, model: str | None = None) -> dict:
    return {
        "model": model or llm_runtime.default_model(),
        "contents": render_contents(request),
        "config": {
            "responseMimeType": "application/json",
            "responseSchema": RESPONSE_SCHEMA,
            "systemInstruction": SYSTEM_PROMPT,
        },
    }


def parse_response(text: str | None) -> RecommendationResponse:
    """
    Turn the service text into a RecommendationResponse.
    The structured-output guarantee is not trusted: the document is re-validated.
    """
    if not text or not text.strip():
        raise EmptyResponse("empty response")
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise MalformedResponse(f"response is not valid JSON: {e}") from e
    try:
        return RecommendationResponse.model_validate(data)
    except ValidationError as e:
        raise MalformedResponse(f"response does not match schema: {e}") from e


# ---------------------------
# Main API
# ---------------------------

def recommend(idea_description: str, optimization_goal: str) -> RecommendationResponse:
    """
    Ask the completion service for a stack recommendation.

    Raises RequestFailure (EmptyResponse, MalformedResponse or TransportFailure).
    """
    try:
        request = RecommendationRequest(
            idea_description=idea_description,
            optimization_goal=optimization_goal,
        )
    except ValidationError as e:
        logger.error("Invalid recommendation request: %s", e)
        raise RequestFailure(f"invalid request: {e}") from e

    payload = build_request(request)
    try:
        text = llm_runtime.generate_json(payload)
    except Exception as e:
        logger.error("LLM call failed: %s", e)
        raise TransportFailure(str(e)) from e

    try:
        return parse_response(text)
    except RequestFailure as e:
        logger.error("Unusable LLM response (%s): %s", type(e).__name__, e)
        if text:
            logger.debug("Raw response was: %s", text[:1000])
        raise
