import json
import logging
import re

# DeepSeek speaks the OpenAI protocol, so the ChatOpenAI client works as-is
from langchain_openai import ChatOpenAI
from langchain_core.messages import HumanMessage

from app.core.config import Settings

logger = logging.getLogger(__name__)


def build_llm(settings: Settings) -> ChatOpenAI | None:
    """ChatOpenAI client, or None when no API key is configured."""
    if not settings.DEEPSEEK_API_KEY:
        logger.warning("⚠️ DEEPSEEK_API_KEY not set. Using fallback data and skipping AI generation.")
        return None
    return ChatOpenAI(
        model=settings.LLM_MODEL,
        api_key=settings.DEEPSEEK_API_KEY,
        base_url=settings.DEEPSEEK_BASE_URL,
        temperature=0.1,  # strict JSON
        max_tokens=1024,
    )


def clean_json_response(text: str) -> str:
    """Removes markdown code blocks if the AI adds them."""
    text = text.strip()
    if text.startswith("```"):
        text = re.sub(r"^```(json)?", "", text)
        text = re.sub(r"```$", "", text)
    return text.strip()


async def generate_json(llm, prompt: str) -> dict:
    """Send one prompt and parse the reply as a JSON object."""
    response = await llm.ainvoke([HumanMessage(content=prompt)])
    data = json.loads(clean_json_response(response.content))
    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object, got {type(data).__name__}")
    return data
