class IndexerError(RuntimeError):
    """Base class for failures that abort an ingestion cycle."""


class FeedError(IndexerError):
    """The Voyager feed could not be fetched or returned an unusable payload."""


class ForwardError(IndexerError):
    """A batch could not be delivered to the Starklens indexer."""


class StorageError(IndexerError):
    """The local event record could not be read or written."""
