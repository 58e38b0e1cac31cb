from abc import ABC, abstractmethod

from sigpack.extraction.models import SignatureBlock
from sigpack.pdf.models import RenderedPage


class BaseMetadataExtractor(ABC):
    """Contract for signature metadata extractors."""

    @abstractmethod
    async def extract(self, page: RenderedPage) -> list[SignatureBlock]:
        """Read the signing blocks on a confirmed signature page.

        Args:
            page: The rendered page image.

        Returns:
            Zero or more blocks with defaults applied. Never raises for
            oracle failures; those yield an empty list.
        """
