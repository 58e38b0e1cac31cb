import base64
from dataclasses import dataclass


@dataclass(frozen=True)
class RenderedPage:
    """A rasterized PDF page ready for metadata extraction and preview."""

    image_bytes: bytes
    width: int
    height: int
    mime_type: str = "image/jpeg"

    @property
    def base64_data(self) -> str:
        return base64.b64encode(self.image_bytes).decode("ascii")

    @property
    def data_url(self) -> str:
        return f"data:{self.mime_type};base64,{self.base64_data}"
