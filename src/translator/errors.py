"""Exceptions raised by the strategy builder pipeline.

Validation problems are never raised; they are reported as ValidationError
entries by the IR validator. Only contract violations and failures of the
external translator surface as exceptions.
"""


class StrategyBuilderError(Exception):
    """Base class for strategy builder errors."""

    pass


class TranslationError(StrategyBuilderError):
    """Raised when natural-language translation to IR fails."""

    pass


class UnknownCapabilityError(StrategyBuilderError):
    """Raised when the compiler meets a catalog ID that does not resolve.

    This means the caller skipped validation.
    """

    def __init__(self, catalog_id: str):
        self.catalog_id = catalog_id
        super().__init__(f"Unknown capability: {catalog_id}")
