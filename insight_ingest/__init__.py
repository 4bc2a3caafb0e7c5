"""
Insight Ingest
==============

Ingestion and normalization pipeline for uploaded business documents.

Features:
- Byte-signature file type detection (CSV, Excel, PDF, screenshots, JSON)
- One parsing adapter per format, all producing the same ParsedData table
- Heuristic coercion of currency/percentage/number strings
- Required-field validation reported as data, not exceptions

"""

__version__ = "1.0.0"
