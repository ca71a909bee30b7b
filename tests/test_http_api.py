"""Tests for the framework-neutral request handlers and the error normalizer."""

import logging

import pytest

from codementor.channels.error_response import ApiResponse, error_response, redact_secrets
from codementor.channels.http_api import ChatAPI
from codementor.errors import (
    AdapterInitError,
    ConfigurationRequiredError,
    UnsupportedProviderError,
    UpstreamError,
    ValidationError,
)
from codementor.models.messages import GenerationResult, Message


@pytest.fixture
def api(agent) -> ChatAPI:
    return ChatAPI(agent)


@pytest.fixture
def configured_api(configured_agent) -> ChatAPI:
    return ChatAPI(configured_agent)


# ---------------------------------------------------------------------------
# error_response
# ---------------------------------------------------------------------------


class TestErrorResponse:
    def test_validation_with_details(self):
        exc = ValidationError("Invalid configuration", details={"apiKey": "API key is required"})
        assert error_response(exc) == ApiResponse(
            400,
            {"error": "Invalid configuration", "details": {"apiKey": "API key is required"}},
        )

    def test_validation_without_details_has_no_details_key(self):
        response = error_response(ValidationError("Message and language are required"))
        assert response.body == {"error": "Message and language are required"}

    def test_unsupported_provider(self):
        response = error_response(UnsupportedProviderError("x", ("openai", "anthropic")))
        assert response.status == 400
        assert set(response.body) == {"error"}

    def test_configuration_required(self):
        assert error_response(ConfigurationRequiredError()) == ApiResponse(
            400, {"error": "AI configuration not set"}
        )

    def test_upstream_message_passed_through(self):
        response = error_response(UpstreamError("Rate limit reached", "openai"))
        assert response == ApiResponse(500, {"error": "Rate limit reached"})

    def test_upstream_without_message(self):
        response = error_response(UpstreamError(""))
        assert response.body == {"error": "No response from AI provider"}

    def test_upstream_secret_redacted(self):
        response = error_response(UpstreamError("Incorrect API key provided: sk-proj-abcdef1234567890"))
        assert "abcdef1234567890" not in response.body["error"]

    def test_adapter_init(self):
        response = error_response(AdapterInitError("openai", "boom"))
        assert response == ApiResponse(500, {"error": "Failed to initialize AI service"})

    def test_unknown_exception_uses_fallback(self):
        response = error_response(KeyError("secret internals"), fallback="Failed to process message")
        assert response == ApiResponse(500, {"error": "Failed to process message"})

    def test_ok_property(self):
        assert ApiResponse(200).ok
        assert not ApiResponse(400).ok


class TestRedactSecrets:
    @pytest.mark.parametrize(
        "message",
        [
            "invalid key sk-ant-api03-AAAABBBBCCCC",
            "Authorization: Bearer abcdefghijklmnop",
            "api_key=abcdef123456",
        ],
    )
    def test_redacts(self, message):
        redacted = redact_secrets(message)
        assert "REDACTED" in redacted

    def test_plain_message_untouched(self):
        assert redact_secrets("Connection timeout after 30s") == "Connection timeout after 30s"


# ---------------------------------------------------------------------------
# GET /models, GET /health
# ---------------------------------------------------------------------------


class TestStaticEndpoints:
    def test_models_lists_every_provider(self, api):
        response = api.get_models()
        assert response.status == 200
        assert set(response.body) == {"openai", "anthropic", "litellm"}
        assert all(isinstance(v, list) and v for v in response.body.values())

    def test_health(self, api):
        assert api.health() == ApiResponse(200, {"status": "ok"})


# ---------------------------------------------------------------------------
# POST /config
# ---------------------------------------------------------------------------


class TestPostConfig:
    def test_success(self, api, agent):
        response = api.post_config({"provider": "openai", "apiKey": "sk-test", "model": "gpt-4o"})

        assert response == ApiResponse(200, {"message": "Configuration updated successfully"})
        assert agent.config.model == "gpt-4o"

    @pytest.mark.parametrize("body", [None, {}, "text"])
    def test_missing_body(self, api, body):
        assert api.post_config(body) == ApiResponse(400, {"error": "Configuration is required"})

    def test_missing_fields(self, api, agent):
        response = api.post_config({"provider": "x", "apiKey": "", "model": "m"})

        assert response.status == 400
        assert response.body["error"] == "Invalid configuration"
        assert response.body["details"] == {"apiKey": "API key is required"}
        assert agent.session is None

    def test_invalid_provider(self, api):
        response = api.post_config({"provider": "x", "apiKey": "k", "model": "m"})

        assert response.status == 400
        assert "Invalid provider" in response.body["error"]
        assert "details" not in response.body

    @pytest.mark.parametrize("field", ["provider", "apiKey", "model"])
    def test_non_string_field_rejected(self, api, agent, fake_factory, field):
        body = {"provider": "openai", "apiKey": "sk-test", "model": "gpt-4o"}
        body[field] = 123

        response = api.post_config(body)

        assert response.status == 400
        assert response.body["details"] == {field: f"{field} must be a string"}
        assert agent.session is None
        fake_factory.assert_not_called()

    def test_adapter_failure(self, api, fake_factory):
        fake_factory.side_effect = RuntimeError("boom")

        response = api.post_config({"provider": "openai", "apiKey": "k", "model": "m"})

        assert response == ApiResponse(500, {"error": "Failed to initialize AI service"})

    def test_api_key_not_logged(self, api, caplog):
        with caplog.at_level(logging.INFO, logger="codementor.channels.http_api"):
            api.post_config({"provider": "openai", "apiKey": "sk-very-secret", "model": "gpt-4o"})

        assert "sk-very-secret" not in caplog.text
        assert "gpt-4o" in caplog.text


# ---------------------------------------------------------------------------
# POST /message
# ---------------------------------------------------------------------------


class TestPostMessage:
    def test_success(self, configured_api):
        response = configured_api.post_message({"message": "q", "language": "python"})

        assert response == ApiResponse(200, {"explanation": "Use a loop.", "code": "for x in y: pass"})

    def test_previous_messages_forwarded_in_order(self, configured_api, configured_agent):
        configured_api.post_message(
            {
                "message": "c",
                "language": "python",
                "previousMessages": [
                    {"role": "user", "content": "a"},
                    {"role": "assistant", "content": "b"},
                ],
            }
        )

        messages = configured_agent.session.adapter.generate.call_args.args[0]
        assert messages[1:] == [
            Message(role="user", content="a"),
            Message(role="assistant", content="b"),
            Message(role="user", content="c"),
        ]

    @pytest.mark.parametrize(
        "body",
        [{"language": "python"}, {"message": "q"}, {"message": "", "language": ""}, None],
    )
    def test_missing_fields(self, configured_api, body):
        assert configured_api.post_message(body) == ApiResponse(
            400, {"error": "Message and language are required"}
        )

    def test_unconfigured(self, api):
        assert api.post_message({"message": "q", "language": "python"}) == ApiResponse(
            400, {"error": "AI configuration not set"}
        )

    def test_invalid_history(self, configured_api):
        response = configured_api.post_message(
            {"message": "q", "language": "python", "previousMessages": "nope"}
        )
        assert response.status == 400
        assert "previousMessages" in response.body["details"]

    def test_missing_message_reported_before_bad_history(self, configured_api):
        response = configured_api.post_message(
            {"language": "python", "previousMessages": "nope"}
        )
        assert response == ApiResponse(400, {"error": "Message and language are required"})

    def test_unconfigured_reported_before_bad_history(self, api):
        response = api.post_message(
            {"message": "q", "language": "python", "previousMessages": [{"role": "tool"}]}
        )
        assert response == ApiResponse(400, {"error": "AI configuration not set"})

    @pytest.mark.parametrize(
        "body, field",
        [
            ({"message": 123, "language": "python"}, "message"),
            ({"message": "q", "language": ["python"]}, "language"),
        ],
    )
    def test_non_string_fields_rejected(self, configured_api, configured_agent, body, field):
        response = configured_api.post_message(body)

        assert response.status == 400
        assert field in response.body["details"]
        configured_agent.session.adapter.generate.assert_not_called()

    def test_upstream_failure(self, configured_api, configured_agent):
        configured_agent.session.adapter.generate.side_effect = UpstreamError(
            "No response from OpenAI", "openai"
        )

        response = configured_api.post_message({"message": "q", "language": "python"})

        assert response == ApiResponse(500, {"error": "No response from OpenAI"})

    def test_unexpected_failure(self, configured_api, configured_agent):
        configured_agent.session.adapter.generate.side_effect = RuntimeError("oops")

        response = configured_api.post_message({"message": "q", "language": "python"})

        assert response == ApiResponse(500, {"error": "Failed to process message"})

    @pytest.mark.asyncio
    async def test_async_success(self, configured_api, configured_agent):
        configured_agent.session.adapter.agenerate.return_value = GenerationResult("async", "")

        response = await configured_api.apost_message({"message": "q", "language": "python"})

        assert response == ApiResponse(200, {"explanation": "async", "code": ""})
