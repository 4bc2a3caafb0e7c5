"""
Parser Factory - Strategy Selection
====================================

Factory for instantiating the parsing strategy for a detected
DataSourceType. Implements the Factory Pattern for clean strategy selection.

Follows Open/Closed Principle: Add new strategies without modifying this file.
"""

from typing import Any

from insight_ingest.ingest.csv_strategy import CsvStrategy
from insight_ingest.ingest.excel_strategy import ExcelStrategy
from insight_ingest.ingest.image_strategy import ImageStrategy
from insight_ingest.ingest.json_strategy import JsonStrategy
from insight_ingest.ingest.pdf_strategy import PdfStrategy
from insight_ingest.ingest.table_normalizer import TableNormalizer
from insight_ingest.schemas.domain import DataSourceType
from insight_ingest.utils.errors import ConfigurationError, UnsupportedFileTypeError
from insight_ingest.utils.logger import get_logger

logger = get_logger(__name__)

# Registry of available strategies
_STRATEGY_REGISTRY: dict[DataSourceType, type[TableNormalizer]] = {
    DataSourceType.CSV: CsvStrategy,
    DataSourceType.EXCEL: ExcelStrategy,
    DataSourceType.PDF: PdfStrategy,
    DataSourceType.SCREENSHOT: ImageStrategy,
    DataSourceType.JSON: JsonStrategy,
}


class ParserFactory:
    """
    Factory for creating file parsing strategies.

    Usage:
        parser = ParserFactory.create(DataSourceType.CSV, delimiter=";")

        parser = ParserFactory.create(
            DataSourceType.SCREENSHOT,
            extractor=extractor,
            context="Meta Ads dashboard",
        )
    """

    @staticmethod
    def create(file_type: DataSourceType | str, **kwargs: Any) -> TableNormalizer:
        """
        Create a parser strategy for the given file type.

        Args:
            file_type: Detected DataSourceType (or its string value)
            **kwargs: Additional arguments passed to strategy constructor

        Returns:
            TableNormalizer implementation for the file type

        Raises:
            UnsupportedFileTypeError: If no strategy is registered
            ConfigurationError: If kwargs do not fit the strategy
        """
        strategy_class = _STRATEGY_REGISTRY.get(_coerce(file_type))
        if strategy_class is None:
            raise UnsupportedFileTypeError(
                message=f"Unsupported file type: {getattr(file_type, 'value', file_type)}",
                details={
                    "file_type": str(getattr(file_type, "value", file_type)),
                    "supported_types": ParserFactory.get_supported_types(),
                },
            )

        logger.debug(
            "Creating parser strategy",
            file_type=str(getattr(file_type, "value", file_type)),
            strategy=strategy_class.__name__,
            options=sorted(kwargs),
        )

        try:
            return strategy_class(**kwargs)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(
                message=f"Invalid options for {strategy_class.__name__}: {e}",
                details={"strategy": strategy_class.__name__, "options": sorted(kwargs)},
            ) from e

    @staticmethod
    def get_supported_types() -> list[str]:
        """
        Get list of supported file types.

        Returns:
            List of supported DataSourceType values
        """
        return [file_type.value for file_type in _STRATEGY_REGISTRY]

    @staticmethod
    def is_supported(file_type: DataSourceType | str) -> bool:
        """Check if a file type has a registered strategy."""
        return _coerce(file_type) in _STRATEGY_REGISTRY

    @staticmethod
    def register_strategy(
        file_type: DataSourceType,
        strategy_class: type[TableNormalizer],
    ) -> None:
        """
        Register a new parsing strategy, replacing any existing one.

        Args:
            file_type: DataSourceType to handle
            strategy_class: TableNormalizer subclass
        """
        _STRATEGY_REGISTRY[file_type] = strategy_class
        logger.info(
            "Parser strategy registered",
            file_type=file_type.value,
            strategy=strategy_class.__name__,
        )


def _coerce(file_type: DataSourceType | str) -> DataSourceType | None:
    if isinstance(file_type, DataSourceType):
        return file_type
    try:
        return DataSourceType(str(file_type).upper())
    except ValueError:
        return None


def get_parser(file_type: DataSourceType | str, **kwargs: Any) -> TableNormalizer:
    """
    Convenience function to get a parser for a file type.

    Args:
        file_type: Type of file to parse
        **kwargs: Arguments for the strategy

    Returns:
        TableNormalizer implementation
    """
    return ParserFactory.create(file_type, **kwargs)
