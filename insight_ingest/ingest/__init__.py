"""
Ingest Package
==============

File type detection and format parsing strategies.

Components:
    - detect_file_type / FileTypeDetector: Signature + extension sniffing
    - TableNormalizer: Abstract base class for parsing strategies
    - CsvStrategy, ExcelStrategy, PdfStrategy, ImageStrategy, JsonStrategy
    - ParserFactory: Factory for selecting parsing strategies
    - ImageExtractor / HttpImageExtractor: Screenshot extraction boundary
"""

from insight_ingest.ingest.csv_strategy import CsvStrategy
from insight_ingest.ingest.excel_strategy import ExcelStrategy
from insight_ingest.ingest.file_type_detector import FileTypeDetector, detect_file_type
from insight_ingest.ingest.image_extractor import HttpImageExtractor, ImageExtractor
from insight_ingest.ingest.image_strategy import ImageStrategy
from insight_ingest.ingest.json_strategy import JsonStrategy
from insight_ingest.ingest.parser_factory import ParserFactory, get_parser
from insight_ingest.ingest.pdf_strategy import PdfStrategy
from insight_ingest.ingest.table_normalizer import TableNormalizer

__all__ = [
    # Detection
    "FileTypeDetector",
    "detect_file_type",
    # Base class
    "TableNormalizer",
    # Strategies
    "CsvStrategy",
    "ExcelStrategy",
    "ImageStrategy",
    "JsonStrategy",
    "PdfStrategy",
    # Factory
    "ParserFactory",
    "get_parser",
    # Image extraction boundary
    "HttpImageExtractor",
    "ImageExtractor",
]
