"""AI-powered signature metadata extractor."""

import json
from pathlib import Path

from sigpack.extraction.base import BaseMetadataExtractor
from sigpack.extraction.client_base import BaseExtractionClient
from sigpack.extraction.models import (
    DEFAULT_CAPACITY,
    UNKNOWN_PARTY,
    ExtractionMalformed,
    ExtractionResult,
    SignatureBlock,
)
from sigpack.extraction.prompt_loader import load_json_schema, load_system_prompt
from sigpack.extraction.validator import parse_response
from sigpack.logging.logger import Log
from sigpack.pdf.models import RenderedPage

USER_PROMPT = (
    "Extract the Party, Signatory, and Capacity from each signature block "
    "on this signature page."
)


class MetadataExtractor(BaseMetadataExtractor):
    """Extracts party/signatory/capacity from a page image using an AI provider.

    Any provider failure or unparsable response yields an empty list.
    """

    def __init__(
        self,
        *,
        client: BaseExtractionClient,
        model: str,
        temperature: float = 0.0,
        system_prompt_path: Path | None = None,
        json_schema_path: Path | None = None,
    ) -> None:
        self._client = client
        self._model = model
        self._temperature = max(0.0, min(0.2, temperature))
        self._system_prompt = load_system_prompt(system_prompt_path)
        self._json_schema = json.loads(load_json_schema(json_schema_path))

    async def extract(self, page: RenderedPage) -> list[SignatureBlock]:
        result = await self.request(page)
        if isinstance(result, ExtractionMalformed):
            Log.warning(f"Signature metadata extraction failed: {result.reason}")
            return []
        blocks = [apply_defaults(block) for block in result.blocks]
        Log.info(f"Metadata extraction complete: {len(blocks)} signature block(s)")
        return blocks

    async def request(self, page: RenderedPage) -> ExtractionResult:
        """Call the provider and parse its answer into a tagged result."""
        try:
            raw_response = await self._client.create_vision_completion(
                model=self._model,
                temperature=self._temperature,
                system_prompt=self._system_prompt,
                user_prompt=USER_PROMPT,
                image_base64=page.base64_data,
                image_mime_type=page.mime_type,
                json_schema=self._json_schema,
            )
        except Exception as exc:
            return ExtractionMalformed(reason=str(exc))
        Log.debug(f"AI raw response:\n{raw_response}")
        return parse_response(raw_response)


def apply_defaults(block: SignatureBlock) -> SignatureBlock:
    """Fill in the party and capacity labels when the oracle left them empty."""
    return SignatureBlock(
        party_name=block.party_name or UNKNOWN_PARTY,
        signatory_name=block.signatory_name,
        capacity=block.capacity or DEFAULT_CAPACITY,
    )
