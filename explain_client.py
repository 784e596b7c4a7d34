"""
code-stopper Error Explainer
Asks an OpenAI-compatible chat model to explain a rejected line
"""
import httpx
from typing import Any, Dict, Optional
from loguru import logger

from config import settings

SYSTEM_PROMPT = """You are a helpful coding assistant that explains syntax errors and suggests fixes.

Be concise but helpful. Format your response as:
1. **Problem**: One sentence explaining what's wrong
2. **Fix**: The corrected code
3. **Tip**: A brief tip to avoid this error in the future"""


class ExplainerNotConfigured(RuntimeError):
    """No API key is available for the explanation service"""


class ExplainerBadResponse(RuntimeError):
    """The explanation service answered with a body we cannot read"""


class ErrorExplainer:
    """Client for error explanations"""

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        model: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key if api_key is not None else settings.openai_api_key
        self.base_url = (base_url or settings.openai_base_url).rstrip("/")
        self.model = model or settings.explain_model
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def configured(self) -> bool:
        return bool(self.api_key)

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client"""
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=settings.explain_timeout,
                transport=self._transport,
            )
        return self._client

    async def close(self):
        """Close HTTP client"""
        if self._client:
            await self._client.aclose()
            self._client = None

    def build_messages(
        self,
        code: str,
        error: str,
        language: str,
        line_number: Optional[int] = None,
    ) -> list:
        user_prompt = (
            f"Language: {language}\n"
            f"Line {line_number or 'unknown'}: {code or 'Not provided'}\n"
            f"\n"
            f"Error: {error}\n"
            f"\n"
            f"Explain this error and show how to fix it."
        )
        return [
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": user_prompt},
        ]

    async def explain(
        self,
        code: str,
        error: str,
        language: str,
        line_number: Optional[int] = None,
    ) -> str:
        """
        Explain a rejected line

        Args:
            code: The rejected line text
            error: Diagnostic message from the validator
            language: Language tag of the editor
            line_number: 1-indexed line number, if known

        Returns:
            Markdown explanation from the model
        """
        if not error:
            raise ValueError("No error message provided")
        if not self.configured:
            raise ExplainerNotConfigured("openai_api_key is not configured")

        payload: Dict[str, Any] = {
            "model": self.model,
            "messages": self.build_messages(code, error, language, line_number),
            "max_tokens": 300,
            "temperature": 0.3,
        }

        client = await self._get_client()
        response = await client.post(
            f"{self.base_url}/chat/completions",
            json=payload,
            headers={"Authorization": f"Bearer {self.api_key}"},
        )
        if response.status_code != 200:
            logger.error(f"Explanation API error {response.status_code}: {response.text}")
            response.raise_for_status()

        try:
            data = response.json()
        except ValueError as e:
            raise ExplainerBadResponse(f"Explanation API returned non-JSON body: {e}") from e
        if not isinstance(data, dict):
            raise ExplainerBadResponse(f"Explanation API returned {type(data).__name__}, expected an object")

        choices = data.get("choices") or []
        first = choices[0] if isinstance(choices, list) and choices else None
        if isinstance(first, dict):
            content = (first.get("message") or {}).get("content")
            if content:
                return content
        return "Unable to explain error"


# Singleton instance
error_explainer = ErrorExplainer()
