"""
HTTP API
========

FastAPI surface for uploading files into the ingestion pipeline.
"""
