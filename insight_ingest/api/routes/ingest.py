"""
Ingest Routes
=============

Endpoints:
- POST /ingest/file - Upload one file and return the IngestionResult

The request is processed synchronously; the response is the serialized
result or a 400 body describing the first pipeline failure.
"""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, File, Form, UploadFile, status

from insight_ingest.api.dependencies import get_ingestion_service
from insight_ingest.schemas.domain import IngestionOptions
from insight_ingest.services.ingestion_service import IngestionService
from insight_ingest.utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter()


def _split_fields(raw: str | None) -> list[str]:
    if not raw:
        return []
    return [field.strip() for field in raw.split(",") if field.strip()]


@router.post(
    "/file",
    status_code=status.HTTP_200_OK,
    summary="Ingest an uploaded file",
    description=(
        "Upload a CSV, Excel, PDF, PNG/JPEG or JSON file. The file type is "
        "detected from its leading bytes and extension, parsed into a table, "
        "normalized and checked for the requested required fields."
    ),
    responses={
        200: {"description": "File ingested"},
        400: {"description": "File could not be ingested"},
    },
)
async def ingest_uploaded_file(
    file: Annotated[UploadFile, File(description="File to ingest")],
    service: Annotated[IngestionService, Depends(get_ingestion_service)],
    context: Annotated[str | None, Form()] = None,
    file_context: Annotated[str | None, Form()] = None,
    required_fields: Annotated[
        str | None, Form(description="Comma-separated required field names")
    ] = None,
    target_schema: Annotated[str, Form()] = "standard",
) -> dict[str, Any]:
    """
    Ingest one uploaded file.

    Returns:
        Serialized IngestionResult

    Raises:
        IngestionError: Rendered as HTTP 400 by the application error handler
    """
    filename = file.filename or "upload"
    logger.info(
        "File upload received",
        filename=filename,
        content_type=file.content_type,
    )

    options = IngestionOptions(
        required_fields=_split_fields(required_fields),
        target_schema=target_schema,
        file_context=file_context,
    )

    result = await service.ingest(file, filename, context=context, options=options)
    return result.to_dict()
