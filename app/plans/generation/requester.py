"""AI plan requester.

Sends one prompt to the Gemini `generateContent` REST endpoint and returns
the raw text of the first candidate. No retries: a failed generation is
surfaced to the caller, which offers a manual regenerate.
"""

from typing import Any

import httpx
from loguru import logger

from app.config.settings import Settings, settings

GENERATION_CONFIG: dict[str, Any] = {
    "temperature": 0.7,
    "topK": 40,
    "topP": 0.95,
    "maxOutputTokens": 2048,
}


class PlanRequestError(Exception):
    """Plan generation request error.

    Codes: MISSING_API_KEY, TIMEOUT, HTTP_ERROR, EMPTY_RESPONSE, TRANSPORT_ERROR
    """

    def __init__(self, code: str, message: str):
        self.code = code
        self.message = message
        super().__init__(self.message)


class PlanRequestTimeoutError(PlanRequestError):
    """The model did not answer within the configured timeout."""

    def __init__(self, timeout: float):
        self.timeout = timeout
        super().__init__("TIMEOUT", f"Plan generation timed out after {timeout}s")


def build_request_body(prompt: str) -> dict[str, Any]:
    return {
        "contents": [{"parts": [{"text": prompt}]}],
        "generationConfig": GENERATION_CONFIG,
    }


def extract_candidate_text(payload: Any) -> str | None:
    """Get `candidates[0].content.parts[0].text` from a response payload."""
    try:
        text = payload["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        return None
    return text if isinstance(text, str) and text.strip() else None


async def request_plan_text(
    prompt: str,
    *,
    config: Settings | None = None,
    http_client: httpx.AsyncClient | None = None,
) -> str:
    """Request a plan draft from the generative model.

    Args:
        prompt: Full prompt text
        config: Settings to use (defaults to the global settings)
        http_client: Optional client to reuse; a short-lived one is created otherwise

    Returns:
        Raw model text (still to be normalized)

    Raises:
        PlanRequestTimeoutError: If the request exceeds the configured timeout
        PlanRequestError: For a missing API key, HTTP errors, transport errors,
            or a response without text
    """
    config = config or settings
    if not config.gemini_api_key:
        raise PlanRequestError("MISSING_API_KEY", "Gemini API key not configured")

    url = f"{config.gemini_api_base_url.rstrip('/')}/models/{config.gemini_model}:generateContent"
    timeout = config.llm_timeout_seconds

    logger.debug(
        "Requesting plan from generative model",
        model=config.gemini_model,
        prompt_chars=len(prompt),
        timeout=timeout,
    )

    owns_client = http_client is None
    client = http_client or httpx.AsyncClient(timeout=timeout)
    try:
        response = await client.post(
            url,
            params={"key": config.gemini_api_key},
            json=build_request_body(prompt),
            timeout=timeout,
        )
        response.raise_for_status()
        payload = response.json()
    except httpx.TimeoutException as e:
        logger.error("Plan generation request timed out", model=config.gemini_model, timeout=timeout)
        raise PlanRequestTimeoutError(timeout) from e
    except httpx.HTTPStatusError as e:
        logger.error(
            "Plan generation request failed",
            model=config.gemini_model,
            status_code=e.response.status_code,
        )
        raise PlanRequestError("HTTP_ERROR", f"Gemini API error: {e.response.status_code}") from e
    except httpx.HTTPError as e:
        logger.error("Plan generation transport error", model=config.gemini_model, error=str(e))
        raise PlanRequestError("TRANSPORT_ERROR", f"Gemini API unreachable: {e}") from e
    except ValueError as e:
        raise PlanRequestError("EMPTY_RESPONSE", "Gemini API returned a non-JSON body") from e
    finally:
        if owns_client:
            await client.aclose()

    text = extract_candidate_text(payload)
    if text is None:
        logger.error("Plan generation returned no content", model=config.gemini_model)
        raise PlanRequestError("EMPTY_RESPONSE", "No content generated by Gemini")

    logger.debug("Plan text received", chars=len(text))
    return text
