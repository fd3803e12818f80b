"""
Adaptateur vers l'API de complétion (OpenAI Chat Completions).

- Un seul appel par question, sans retry (max_retries=0) et avec un timeout borné.
- Les erreurs du SDK sont traduites en erreurs domaine :
  quota -> UpstreamQuotaError, clé invalide -> UpstreamAuthError, le reste -> UpstreamError.
"""

import logging
from dataclasses import dataclass
from typing import Optional

import openai
from openai import OpenAI

from boardgame_qa.core.errors import UpstreamAuthError, UpstreamError, UpstreamQuotaError

log = logging.getLogger(__name__)


@dataclass
class CompletionSettings:
    model: str = "gpt-4"
    max_tokens: int = 1000
    temperature: float = 0.3
    timeout_s: float = 30.0

    @classmethod
    def from_settings(cls, settings) -> "CompletionSettings":
        return cls(
            model=settings.OPENAI_MODEL,
            max_tokens=settings.OPENAI_MAX_TOKENS,
            temperature=settings.OPENAI_TEMPERATURE,
            timeout_s=settings.OPENAI_TIMEOUT_SECONDS,
        )


class CompletionClient:
    """Interface minimale : un message système + un message utilisateur -> texte (ou None)."""

    def complete(self, *, system: str, user: str) -> Optional[str]:
        raise NotImplementedError


class OpenAICompletionClient(CompletionClient):
    def __init__(self, api_key: Optional[str], config: CompletionSettings, client: Optional[OpenAI] = None):
        self.config = config
        # api_key vide : le SDK refuse de construire le client, on diffère l'erreur à l'appel
        self.client = client or OpenAI(
            api_key=api_key or "missing-api-key",
            timeout=config.timeout_s,
            max_retries=0,
        )

    def complete(self, *, system: str, user: str) -> Optional[str]:
        try:
            rsp = self.client.chat.completions.create(
                model=self.config.model,
                messages=[
                    {"role": "system", "content": system},
                    {"role": "user", "content": user},
                ],
                max_tokens=self.config.max_tokens,
                temperature=self.config.temperature,
            )
        except openai.RateLimitError as e:
            log.warning("OpenAI quota/rate limit reached (code=%s)", getattr(e, "code", None))
            raise UpstreamQuotaError(str(e)) from e
        except openai.AuthenticationError as e:
            log.error("OpenAI rejected the API key (code=%s)", getattr(e, "code", None))
            raise UpstreamAuthError(str(e)) from e
        except openai.APITimeoutError as e:
            log.error("OpenAI call timed out after %.1fs", self.config.timeout_s)
            raise UpstreamError("completion timed out") from e
        except openai.APIError as e:
            code = getattr(e, "code", None)
            if code == "insufficient_quota":
                raise UpstreamQuotaError(str(e)) from e
            if code == "invalid_api_key":
                raise UpstreamAuthError(str(e)) from e
            log.error("OpenAI call failed: %s", e)
            raise UpstreamError(str(e)) from e

        if not rsp.choices:
            return None
        return rsp.choices[0].message.content
