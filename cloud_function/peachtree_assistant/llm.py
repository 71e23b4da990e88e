import logging

from google import genai

from . import config
from .errors import UpstreamError

logger = logging.getLogger(__name__)

_genai_client = None


def get_genai_client():
    """Lazy-initialize the Gemini client once per process."""
    global _genai_client
    if _genai_client is None:
        _genai_client = genai.Client(api_key=config.gemini_api_key())
    return _genai_client


def generate_text(prompt: str) -> str:
    model = config.gemini_model()
    logger.info("Calling %s (%d prompt chars)", model, len(prompt))
    resp = get_genai_client().models.generate_content(model=model, contents=prompt)
    if resp.text is None:
        # Blocked or empty candidates carry no text
        raise UpstreamError(f"{model} returned no text")
    return resp.text
