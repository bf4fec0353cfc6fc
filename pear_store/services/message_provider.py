"""
Message Providers

Produce the human-readable text shown with each order status and the
marketing description of newly added phones. The template provider is
local and deterministic; the LLM provider calls a text-generation API
over HTTP.
"""

import asyncio
import logging
from typing import Optional

import httpx

from ..core.config import Settings
from ..core.errors import ProviderError
from ..models.order import OrderStatus

logger = logging.getLogger(__name__)

FALLBACK_STATUS_MESSAGE = "Your order is now: {status}. We'll notify you of the next steps."
FALLBACK_DESCRIPTION = "Experience the new {name}, designed for excellence."
GENERIC_STATUS_MESSAGE = "Your order status has been updated."

STATUS_PROMPTS: dict[OrderStatus, str] = {
    OrderStatus.PROCESSING: (
        "Write a friendly, reassuring message confirming that a customer's "
        "phone order is now being processed."
    ),
    OrderStatus.PACKAGED: (
        "Write an exciting message that a customer's phone order has been "
        "carefully packaged and is ready for shipment."
    ),
    OrderStatus.SHIPPED: (
        "Write a professional message informing a customer that their phone "
        "order has been shipped and is on its way. Mention that tracking "
        "details will be available soon."
    ),
    OrderStatus.DELIVERED: (
        "Write a cheerful and welcoming message confirming that a customer's "
        "new phone has been delivered. Encourage them to enjoy their new device."
    ),
}

DESCRIPTION_PROMPT = (
    "Generate a short, exciting, one-sentence marketing description for this "
    "phone model: {name}."
)


def fallback_status_message(status: OrderStatus) -> str:
    return FALLBACK_STATUS_MESSAGE.format(status=status.value)


def fallback_description(name: str) -> str:
    return FALLBACK_DESCRIPTION.format(name=name)


class MessageProvider:
    """Interface for status and description text sources"""

    async def status_message(self, status: OrderStatus) -> str:
        raise NotImplementedError

    async def product_description(self, name: str) -> str:
        raise NotImplementedError

    async def close(self) -> None:
        """Release any held resources"""


class TemplateMessageProvider(MessageProvider):
    """Deterministic local provider with optional simulated latency"""

    def __init__(self, latency: float = 0.0):
        self.latency = latency

    async def status_message(self, status: OrderStatus) -> str:
        if self.latency:
            await asyncio.sleep(self.latency)
        return fallback_status_message(status)

    async def product_description(self, name: str) -> str:
        return fallback_description(name)


class LLMMessageProvider(MessageProvider):
    """
    Provider backed by the Anthropic Messages API.

    Without an API key it answers with the template texts, matching a
    disabled text-generation capability. With a key, transport or payload
    problems raise ProviderError for status messages; descriptions always
    fall back to the template.
    """

    API_VERSION = "2023-06-01"

    def __init__(
        self,
        api_key: Optional[str],
        model: str,
        base_url: str = "https://api.anthropic.com",
        max_tokens: int = 200,
        timeout: float = 30.0,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Initialize the provider.

        Args:
            api_key: Text-generation API key; None disables remote calls
            model: Model name sent with each request
            base_url: Base URL of the API
            max_tokens: Generation limit per message
            timeout: HTTP timeout in seconds
            http_client: Client to use instead of creating one
        """
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.max_tokens = max_tokens
        self._http_client = http_client or httpx.AsyncClient(timeout=timeout)

        if not api_key:
            logger.warning(
                "No text-generation API key provided - status messages and "
                "descriptions will use fallback templates"
            )

    @property
    def enabled(self) -> bool:
        return bool(self.api_key)

    async def close(self) -> None:
        """Close HTTP client"""
        await self._http_client.aclose()

    def _headers(self) -> dict[str, str]:
        return {
            "x-api-key": self.api_key or "",
            "anthropic-version": self.API_VERSION,
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

    async def _generate(self, prompt: str) -> str:
        """Send one prompt and return the generated text"""
        url = f"{self.base_url}/v1/messages"
        body = {
            "model": self.model,
            "max_tokens": self.max_tokens,
            "messages": [{"role": "user", "content": prompt}],
        }

        try:
            response = await self._http_client.post(url, headers=self._headers(), json=body)
        except httpx.HTTPError as e:
            raise ProviderError(f"Text generation request failed: {e}") from e

        if response.status_code >= 400:
            logger.error(f"Text generation failed: {response.status_code} - {response.text}")
            raise ProviderError(f"Text generation returned HTTP {response.status_code}")

        try:
            payload = response.json()
        except ValueError as e:
            raise ProviderError("Text generation returned invalid JSON") from e

        content = payload.get("content") if isinstance(payload, dict) else None
        if not isinstance(content, list) or not all(isinstance(b, dict) for b in content):
            logger.error(f"Unexpected text generation payload: {response.text}")
            raise ProviderError("Text generation returned an unexpected payload")

        text = "".join(
            str(block.get("text") or "")
            for block in content
            if block.get("type") == "text"
        ).strip()

        if not text:
            raise ProviderError("Text generation returned no text")
        return text

    async def status_message(self, status: OrderStatus) -> str:
        if not self.enabled:
            logger.info(f"Text generation disabled. Returning fallback message for status: {status.value}")
            return fallback_status_message(status)

        prompt = STATUS_PROMPTS.get(status)
        if prompt is None:
            return GENERIC_STATUS_MESSAGE

        return await self._generate(prompt)

    async def product_description(self, name: str) -> str:
        if not self.enabled:
            logger.info(f"Text generation disabled. Returning fallback description for {name}")
            return fallback_description(name)

        try:
            return await self._generate(DESCRIPTION_PROMPT.format(name=name))
        except ProviderError as e:
            logger.error(f"Error generating description, falling back: {e}")
            return fallback_description(name)


def build_message_provider(settings: Settings) -> MessageProvider:
    """Create the provider selected by configuration"""
    if settings.message_provider == "llm":
        return LLMMessageProvider(
            api_key=settings.anthropic_api_key,
            model=settings.llm_model,
            base_url=settings.llm_base_url,
            max_tokens=settings.llm_max_tokens,
        )
    return TemplateMessageProvider(latency=settings.provider_latency_seconds)
