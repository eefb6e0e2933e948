"""Product link extraction REST endpoint."""

from __future__ import annotations

import logging

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from app.schemas.links import (
    ExtractLinkErrorResponse,
    ExtractLinkRequest,
    ExtractLinkResponse,
    ProductInfoSchema,
)
from app.services.extractors.exceptions import ExtractionError, InvalidUrlError
from app.services.link_extractor import ProductLinkExtractor, normalize_url

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["links"])


def _error_response(message: str) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content=ExtractLinkErrorResponse(error=message).model_dump(),
    )


@router.post(
    "/extract-link",
    response_model=ExtractLinkResponse,
    response_model_exclude_none=True,
    responses={400: {"model": ExtractLinkErrorResponse}},
)
async def extract_link(request: ExtractLinkRequest):
    """Extract product title, price and description from a product URL.

    The URL is trimmed and prefixed with https:// when no scheme is given.
    Every extraction failure is a 400 with a message meant for the end user,
    who can then fill the purchase in manually.
    """
    if request.url is None or (isinstance(request.url, str) and not request.url.strip()):
        return _error_response("URL is required")
    if not isinstance(request.url, str):
        return _error_response(str(InvalidUrlError()))

    url = normalize_url(request.url)
    logger.info("Extraction request for %s", url)

    try:
        info = await ProductLinkExtractor().extract(url)
    except ExtractionError as e:
        logger.warning("Link extraction failed for %s (%s): %s", url, e.code, e)
        return _error_response(str(e))

    return ExtractLinkResponse(data=ProductInfoSchema(**info.to_dict()))
