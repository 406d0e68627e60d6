import unittest
from unittest import mock

import httpx
import openai

from fakes import chat_reply, fake_openai

from weekfit.infra import ai_gateway
from weekfit.infra.ai_gateway import AIGateway, AIServiceError, parse_json_reply, error_for_status
from weekfit.utilities.constants import AI_RATE_LIMIT_MESSAGE, AI_NO_CREDITS_MESSAGE


def _status_error(status):
    request = httpx.Request("POST", "https://ai.example.test/v1/chat/completions")
    response = httpx.Response(status, request=request)
    return openai.APIStatusError(f"upstream {status}", response=response, body=None)


def _raising(error):
    def create(**kwargs):
        raise error
    return create


class TestParseJsonReply(unittest.TestCase):
    def test_plain_json(self):
        self.assertEqual(parse_json_reply('{"name": "Bowl"}'), {"name": "Bowl"})

    def test_code_fence_and_trailing_comma(self):
        text = '```json\n{"name": "Bowl", "ingredients": ["Oats", "Milk",],}\n```'
        self.assertEqual(parse_json_reply(text), {"name": "Bowl", "ingredients": ["Oats", "Milk"]})

    def test_json_inside_prose(self):
        text = 'Here is your recipe: {"name": "Soup", "tags": ["a {b}"]} Enjoy!'
        self.assertEqual(parse_json_reply(text)["name"], "Soup")

    def test_unparseable(self):
        for text in ("", "no json here", "[1, 2, 3]"):
            with self.assertRaises(AIServiceError) as ctx:
                parse_json_reply(text)
            self.assertEqual(ctx.exception.status_code, 500)


class TestErrorMapping(unittest.TestCase):
    def test_status_mapping(self):
        self.assertEqual(error_for_status(429, "x").message, AI_RATE_LIMIT_MESSAGE)
        self.assertEqual(error_for_status(402, "x").status_code, 402)
        err = error_for_status(503, "Service unavailable")
        self.assertEqual((err.status_code, err.message), (500, "Service unavailable"))


class TestAIGateway(unittest.TestCase):
    def test_success_sends_json_mode(self):
        calls = []

        def create(**kwargs):
            calls.append(kwargs)
            return chat_reply('{"weeklyMenu": []}')

        gateway = AIGateway(api_key="key", model="test-model", client=fake_openai(create))
        self.assertEqual(gateway.complete_json("system", "user"), {"weeklyMenu": []})
        self.assertEqual(calls[0]["model"], "test-model")
        self.assertEqual(calls[0]["response_format"], {"type": "json_object"})
        self.assertEqual([m["role"] for m in calls[0]["messages"]], ["system", "user"])

    def test_rate_limited(self):
        gateway = AIGateway(api_key="key", client=fake_openai(_raising(_status_error(429))))
        with self.assertRaises(AIServiceError) as ctx:
            gateway.complete_json("s", "u")
        self.assertEqual(ctx.exception.status_code, 429)
        self.assertEqual(ctx.exception.message, AI_RATE_LIMIT_MESSAGE)

    def test_out_of_credits(self):
        gateway = AIGateway(api_key="key", client=fake_openai(_raising(_status_error(402))))
        with self.assertRaises(AIServiceError) as ctx:
            gateway.complete_json("s", "u")
        self.assertEqual(ctx.exception.status_code, 402)
        self.assertEqual(ctx.exception.message, AI_NO_CREDITS_MESSAGE)

    def test_other_upstream_status_is_500(self):
        gateway = AIGateway(api_key="key", client=fake_openai(_raising(_status_error(503))))
        with self.assertRaises(AIServiceError) as ctx:
            gateway.complete_json("s", "u")
        self.assertEqual(ctx.exception.status_code, 500)

    def test_missing_api_key(self):
        with self.assertRaises(AIServiceError) as ctx:
            AIGateway(api_key="").complete_json("s", "u")
        self.assertEqual(ctx.exception.status_code, 500)
        self.assertIn("AI_API_KEY", ctx.exception.message)


class TestUpstreamCalls(unittest.TestCase):
    """Real OpenAI client over a mocked transport: each request hits the gateway exactly once."""

    def _gateway(self, status):
        calls = []

        def handler(request):
            calls.append(request.url.path)
            return httpx.Response(status, json={"error": {"message": f"upstream {status}"}})

        real_openai = ai_gateway.OpenAI

        def build(**kwargs):
            return real_openai(http_client=httpx.Client(transport=httpx.MockTransport(handler)), **kwargs)

        patcher = mock.patch.object(ai_gateway, "OpenAI", side_effect=build)
        patcher.start()
        self.addCleanup(patcher.stop)
        return AIGateway(api_key="key", base_url="http://gateway.test/v1"), calls

    def test_rate_limit_is_not_retried(self):
        gateway, calls = self._gateway(429)
        with self.assertRaises(AIServiceError) as ctx:
            gateway.complete_json("s", "u")
        self.assertEqual(ctx.exception.status_code, 429)
        self.assertEqual(calls, ["/v1/chat/completions"])

    def test_server_error_is_not_retried(self):
        gateway, calls = self._gateway(503)
        with self.assertRaises(AIServiceError) as ctx:
            gateway.complete_json("s", "u")
        self.assertEqual(ctx.exception.status_code, 500)
        self.assertEqual(len(calls), 1)
