"""
Scheme Search Agent — Schemes API Router
Live search against MyScheme.gov.in through a headless browser.
"""

import asyncio
import functools

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from app.models.scheme import (
    ErrorResponse,
    NotFoundResponse,
    SchemeSearchRequest,
    SchemeSearchResponse,
)
from app.services.query_builder import build_search_query
from app.services.scraper import scheme_extractor
from app.services.scraper.errors import ScraperError
from app.utils.logger import logger

router = APIRouter()


@router.post(
    "/get-schemes",
    response_model=SchemeSearchResponse,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": NotFoundResponse},
        500: {"model": ErrorResponse},
    },
)
async def get_schemes(request: SchemeSearchRequest):
    """
    Search MyScheme for schemes matching a category and/or user profile.
    At least one of category, user.profession, user.state or user.income is required.
    """
    search_text = build_search_query(request)
    if search_text is None:
        return JSONResponse(
            status_code=400,
            content=ErrorResponse(
                error="At least one search parameter is required (category, profession, state, or income)",
            ).model_dump(exclude_none=True),
        )

    logger.info(f"🔍 Constructed search query: {search_text}")

    # Selenium blocks, run it off the event loop
    extractor = scheme_extractor.get_scheme_extractor()
    loop = asyncio.get_running_loop()
    try:
        schemes = await loop.run_in_executor(
            None,
            functools.partial(extractor.search, search_text),
        )
    except ScraperError as e:
        return JSONResponse(
            status_code=500,
            content=ErrorResponse(
                error="Failed to fetch schemes",
                details=str(e),
                suggestion="Please try again with different parameters",
            ).model_dump(),
        )

    if not schemes:
        logger.info(f"No schemes found for: {search_text}")
        return JSONResponse(
            status_code=404,
            content=NotFoundResponse(
                message="No schemes found matching your criteria",
                suggestion="Try broadening your search parameters",
            ).model_dump(),
        )

    return SchemeSearchResponse(count=len(schemes), query=search_text, results=schemes)
