import asyncio
from unittest.mock import patch

from support import FakeAIClient, TempDatabaseTestCase

from app.ai import gateway
from app.ai.factory import get_optional_ai_client
from app.ai.config import AIConfig
from app.ai.providers.gemini_provider import GEMINI_OPENAI_BASE_URL, GeminiProvider
from app.analytics.db import get_ai_run_summary
from app.core.errors import ModelNotConfigured, ModelUnavailable


class _SlowClient(FakeAIClient):
    async def complete(self, prompt: str) -> str:
        await asyncio.sleep(5)
        return "late"


class GatewayTests(TempDatabaseTestCase):
    def test_returns_raw_text_and_records_run(self):
        text = asyncio.run(gateway.complete(FakeAIClient(response="```json\n{}\n```"), "hi", purpose="analysis"))

        self.assertEqual(text, "```json\n{}\n```")
        summary = get_ai_run_summary()
        self.assertEqual(summary["total"], 1)
        self.assertEqual(summary["latest"][0]["status"], "success")
        self.assertEqual(summary["latest"][0]["purpose"], "analysis")

    def test_timeout_is_model_unavailable(self):
        with self.assertRaises(ModelUnavailable) as ctx:
            asyncio.run(gateway.complete(_SlowClient(), "hi", purpose="quest", timeout_s=0.01))
        self.assertEqual(ctx.exception.code, "ai_timeout")
        self.assertEqual(get_ai_run_summary()["latest"][0]["error_code"], "ai_timeout")

    def test_unexpected_errors_are_model_unavailable(self):
        with self.assertRaises(ModelUnavailable):
            asyncio.run(gateway.complete(FakeAIClient(error=ConnectionError("reset")), "hi", purpose="quest"))

    def test_provider_errors_keep_their_code(self):
        error = ModelUnavailable("bad key", code="ai_auth_error")
        with self.assertRaises(ModelUnavailable) as ctx:
            asyncio.run(gateway.complete(FakeAIClient(error=error), "hi", purpose="quest"))
        self.assertEqual(ctx.exception.code, "ai_auth_error")


class ProviderConfigTests(TempDatabaseTestCase):
    def test_missing_key_is_not_configured(self):
        with self.assertRaises(ModelNotConfigured):
            GeminiProvider(model="gemini-2.5-flash-lite", api_key="")

    def test_optional_client_is_none_without_key(self):
        cfg = AIConfig(provider="gemini", model="m", api_key=None, base_url=None, timeout_s=5, temperature=0.2)
        with patch("app.ai.factory.load_ai_config", return_value=cfg):
            self.assertIsNone(get_optional_ai_client())

    def test_gemini_uses_openai_compatible_endpoint(self):
        provider = GeminiProvider(model="gemini-2.5-flash-lite", api_key="test-key")
        self.assertEqual(provider.provider, "gemini")
        self.assertEqual(str(provider._client.base_url), GEMINI_OPENAI_BASE_URL)
        self.assertEqual(provider._client.max_retries, 0)
