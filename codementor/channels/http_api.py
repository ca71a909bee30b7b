"""Request handlers for the chat HTTP contract, independent of any web framework.

Each handler takes the decoded JSON body and returns an ``ApiResponse``; the
hosting framework only has to route requests and serialize the result:

    GET  /models   -> get_models()
    POST /message  -> post_message(body)
    POST /config   -> post_config(body)
    GET  /health   -> health()
"""

import logging

from ..agent.core import ChatAgent
from ..errors import ConfigurationRequiredError, ValidationError
from ..models.messages import Message
from ..providers import AVAILABLE_MODELS
from .error_response import ApiResponse, error_response

logger = logging.getLogger(__name__)


def _parse_history(raw) -> list:
    """Convert ``previousMessages`` from the request body into Message objects."""
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise ValidationError(
            "Invalid previousMessages",
            details={"previousMessages": "previousMessages must be a list"},
        )
    return [Message.from_dict(item) for item in raw]


def _non_string_fields(body: dict, names: tuple) -> dict:
    """Return ``{name: reason}`` for each present, truthy field that is not a string."""
    return {
        name: f"{name} must be a string"
        for name in names
        if body.get(name) and not isinstance(body[name], str)
    }


def _redacted(body: dict) -> dict:
    return {k: ("***" if k == "apiKey" and v else v) for k, v in body.items()}


class ChatAPI:
    """Exposes a ChatAgent through the models / message / config endpoints."""

    def __init__(self, agent: ChatAgent) -> None:
        self._agent = agent

    def health(self) -> ApiResponse:
        return ApiResponse(200, {"status": "ok"})

    def get_models(self) -> ApiResponse:
        return ApiResponse(200, {name: list(models) for name, models in AVAILABLE_MODELS.items()})

    def _parse_message_request(self, body) -> tuple:
        # Checked in order: required fields, configured state, then history.
        if not isinstance(body, dict) or not body.get("message") or not body.get("language"):
            raise ValidationError("Message and language are required")
        wrong_type = _non_string_fields(body, ("message", "language"))
        if wrong_type:
            raise ValidationError("Message and language must be strings", details=wrong_type)
        if not self._agent.is_configured:
            raise ConfigurationRequiredError()
        history = _parse_history(body.get("previousMessages"))
        return body["message"], body["language"], history

    def post_message(self, body) -> ApiResponse:
        try:
            message, language, history = self._parse_message_request(body)
            result = self._agent.send_message(message, language, history)
        except Exception as exc:
            if not isinstance(exc, (ValidationError, ConfigurationRequiredError)):
                logger.exception("Error in post_message")
            return error_response(exc, fallback="Failed to process message")
        return ApiResponse(200, result.to_dict())

    async def apost_message(self, body) -> ApiResponse:
        """Async equivalent of ``post_message()`` for async hosts."""
        try:
            message, language, history = self._parse_message_request(body)
            result = await self._agent.asend_message(message, language, history)
        except Exception as exc:
            if not isinstance(exc, (ValidationError, ConfigurationRequiredError)):
                logger.exception("Error in apost_message")
            return error_response(exc, fallback="Failed to process message")
        return ApiResponse(200, result.to_dict())

    def post_config(self, body) -> ApiResponse:
        if not isinstance(body, dict) or not body:
            return ApiResponse(400, {"error": "Configuration is required"})

        logger.info("Received config update request: %s", _redacted(body))
        try:
            wrong_type = _non_string_fields(body, ("provider", "apiKey", "model"))
            if wrong_type:
                raise ValidationError("Invalid configuration", details=wrong_type)
            self._agent.update_config(
                body.get("provider") or "",
                body.get("apiKey") or "",
                body.get("model") or "",
            )
        except Exception as exc:
            if not isinstance(exc, ValidationError):
                logger.exception("Error in post_config")
            return error_response(exc, fallback="Failed to update configuration")
        return ApiResponse(200, {"message": "Configuration updated successfully"})
