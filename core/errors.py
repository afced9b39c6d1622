class PipelineError(Exception):
    """Base class for errors raised by the news pipeline."""


class FeedError(PipelineError):
    """A feed could not be fetched or parsed. The source is skipped."""


class TranslationError(PipelineError):
    """A translation provider failed or returned nothing usable."""


class StoreError(PipelineError):
    """The persistence backend is unreachable or rejected a write. Fatal for the run."""
