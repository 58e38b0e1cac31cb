from sigpack.config.settings import Settings
from sigpack.extraction.base import BaseMetadataExtractor
from sigpack.extraction.example_client_adapter import ExampleClientAdapter
from sigpack.extraction.extractor import MetadataExtractor
from sigpack.extraction.openai_client_adapter import OpenAIClientAdapter


class MetadataExtractorFactory:
    """Creates the configured metadata extractor."""

    PROVIDERS = ("example", "openai", "openai_compatible")

    @classmethod
    def create(cls, settings: Settings) -> BaseMetadataExtractor:
        """Create a configured extractor from application settings."""
        provider = settings.extraction_provider.lower()
        if provider == "example":
            return MetadataExtractor(client=ExampleClientAdapter(), model="example")
        if provider == "openai":
            client = OpenAIClientAdapter(
                api_key=settings.extraction_openai_api_key,
                timeout_seconds=settings.extraction_openai_timeout_seconds,
                base_url=None,
            )
            model = settings.extraction_openai_model_name
        elif provider == "openai_compatible":
            client = OpenAIClientAdapter(
                api_key=settings.extraction_openai_compatible_api_key,
                timeout_seconds=settings.extraction_openai_compatible_timeout_seconds,
                base_url=cls._resolve_compatible_base_url(settings),
            )
            model = settings.extraction_openai_compatible_model_name
        else:
            raise ValueError(
                f"Unknown extraction provider '{provider}'. Choose from: {list(cls.PROVIDERS)}"
            )
        return MetadataExtractor(
            client=client,
            model=model,
            temperature=settings.extraction_temperature,
        )

    @staticmethod
    def _resolve_compatible_base_url(settings: Settings) -> str:
        url = settings.extraction_openai_compatible_base_url.strip()
        if not url:
            raise ValueError(
                "extraction_openai_compatible_base_url is required for "
                "extraction_provider=openai_compatible"
            )
        return url
