"""Example extraction client adapter.

Use this module as a reference when implementing new provider adapters.
Implement BaseExtractionClient and register the provider in MetadataExtractorFactory.
"""

import json
from typing import ClassVar

from sigpack.extraction.client_base import BaseExtractionClient


class ExampleClientAdapter(BaseExtractionClient):
    """Example adapter that returns a fixed response with no signing blocks.

    No network calls. Pages processed with it end up as placeholder records,
    which is useful for local development and tests.
    """

    DEFAULT_RESPONSE: ClassVar[dict[str, object]] = {"signatures": []}

    async def create_vision_completion(
        self,
        *,
        model: str,
        temperature: float,
        system_prompt: str,
        user_prompt: str,
        image_base64: str,
        image_mime_type: str,
        json_schema: dict[str, object],
    ) -> str:
        _ = model, temperature, system_prompt, user_prompt, image_base64, image_mime_type
        _ = json_schema
        return json.dumps(self.DEFAULT_RESPONSE)
