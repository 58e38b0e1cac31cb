from sigpack.extraction.base import BaseMetadataExtractor
from sigpack.extraction.extractor import MetadataExtractor
from sigpack.extraction.factory import MetadataExtractorFactory

__all__ = ["BaseMetadataExtractor", "MetadataExtractor", "MetadataExtractorFactory"]
