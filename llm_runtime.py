# llm_runtime.py
import os, json, re, logging

from schema import to_json_schema

logger = logging.getLogger(__name__)

# Optional: use Streamlit secrets if present
try:
    import streamlit as st
    _SECRETS = dict(st.secrets)
except Exception:
    _SECRETS = {}

def _get_secret(key: str, default: str | None = None) -> str | None:
    # priority: env var -> st.secrets -> default
    return os.getenv(key) or _SECRETS.get(key, default)

# --- Provider selection
PROVIDER = (_get_secret("LLM_PROVIDER", "gemini") or "gemini").lower()

GEMINI_MODEL = _get_secret("GEMINI_MODEL", "gemini-2.5-flash")
OPENAI_MODEL = _get_secret("OPENAI_MODEL", "gpt-4o-mini")
GROQ_MODEL = _get_secret("GROQ_MODEL", "llama-3.1-8b-instant")

def default_model() -> str:
    return {"openai": OPENAI_MODEL, "groq": GROQ_MODEL}.get(PROVIDER, GEMINI_MODEL)

def _gemini_client():
    from google import genai
    key = _get_secret("GEMINI_API_KEY") or _get_secret("API_KEY")
    if not key:
        raise RuntimeError("Missing GEMINI_API_KEY (set in env or .streamlit/secrets.toml)")
    return genai.Client(api_key=key)

def _groq_client():
    from groq import Groq
    key = _get_secret("GROQ_API_KEY")
    if not key:
        raise RuntimeError("Missing GROQ_API_KEY (set in env or .streamlit/secrets.toml)")
    return Groq(api_key=key)

def _openai_client():
    from openai import OpenAI
    key = _get_secret("OPENAI_API_KEY")
    if not key:
        raise RuntimeError("Missing OPENAI_API_KEY (set in env or .streamlit/secrets.toml)")
    return OpenAI(api_key=key)

_CODEFENCE_RE = re.compile(r"^```(?:json)?\s*|\s*```$", re.IGNORECASE | re.MULTILINE)

def strip_fences(text: str | None) -> str | None:
    """Remove a ```json fence around the whole reply, if any."""
    if text and text.strip().startswith("```"):
        return _CODEFENCE_RE.sub("", text).strip()
    return text

def _messages(payload: dict, system_suffix: str = "") -> list[dict]:
    config = payload.get("config", {})
    return [
        {"role": "system", "content": config.get("systemInstruction", "") + system_suffix},
        {"role": "user", "content": payload["contents"]},
    ]

def generate_json(payload: dict) -> str | None:
    """
    Send one structured-output request to the current provider and return the raw text.

    `payload` is the request built by recommender.build_request:
    {"model", "contents", "config": {"responseMimeType", "responseSchema", "systemInstruction"}}.
    Exactly one call is made; errors propagate to the caller.
    """
    config = payload.get("config", {})
    schema = config.get("responseSchema")
    logger.info("LLM request: provider=%s model=%s", PROVIDER, payload.get("model"))

    if PROVIDER == "gemini":
        from google.genai import types
        client = _gemini_client()
        resp = client.models.generate_content(
            model=payload["model"],
            contents=payload["contents"],
            config=types.GenerateContentConfig(
                response_mime_type=config.get("responseMimeType", "application/json"),
                response_schema=schema,
                system_instruction=config.get("systemInstruction"),
            ),
        )
        return resp.text

    elif PROVIDER == "openai":
        client = _openai_client()
        resp = client.chat.completions.create(
            model=payload["model"],
            messages=_messages(payload),
            response_format={
                "type": "json_schema",
                "json_schema": {
                    "name": "recommendation",
                    "strict": True,
                    "schema": to_json_schema(schema),
                },
            },
        )
        return resp.choices[0].message.content

    elif PROVIDER == "groq":
        # json_object mode only guarantees JSON, so the shape goes into the instruction
        client = _groq_client()
        hint = (
            "\n\nReturn STRICT JSON only. No backticks. The JSON must match this schema:\n"
            + json.dumps(to_json_schema(schema))
        )
        resp = client.chat.completions.create(
            model=payload["model"],
            messages=_messages(payload, hint),
            response_format={"type": "json_object"},
        )
        return strip_fences(resp.choices[0].message.content)

    else:
        raise RuntimeError(f"Unknown LLM_PROVIDER: {PROVIDER}")
