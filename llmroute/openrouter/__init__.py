"""OpenRouter completion client, request builder and vision helper."""

from .request_builder import RequestBuilder
from .vision import load_image_part, sniff_image_type
from .client import CompletionClient

__all__ = ["CompletionClient", "RequestBuilder", "load_image_part", "sniff_image_type"]
