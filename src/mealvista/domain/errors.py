"""Error types raised inside the recipe pipeline."""


class PipelineError(Exception):
    """Base class for recipe pipeline errors."""


class ProviderUnavailableError(PipelineError):
    """A recipe provider could not produce usable recipes."""

    def __init__(self, provider: str, reason: str) -> None:
        super().__init__(f"{provider}: {reason}")
        self.provider = provider
        self.reason = reason


class AllProvidersFailedError(PipelineError):
    """Every configured provider failed for a cuisine."""

    def __init__(self, cuisine: str, failures: dict[str, str]) -> None:
        detail = "; ".join(f"{name}: {reason}" for name, reason in failures.items())
        super().__init__(f"All recipe providers failed for {cuisine}: {detail}")
        self.cuisine = cuisine
        self.failures = failures


class UnknownCuisineError(PipelineError):
    """The requested cuisine is not supported."""

    def __init__(self, cuisine: str, available: list[str]) -> None:
        super().__init__(f"Unknown cuisine: {cuisine}")
        self.cuisine = cuisine
        self.available = available


class GenerationUnusableError(PipelineError):
    """A generation tier produced nothing usable."""


class NutritionLookupTimeoutError(PipelineError):
    """The authoritative nutrition lookup did not answer in time."""
