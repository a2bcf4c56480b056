"""Portfolio exchange routes: JSON import/export and share links."""

import logging
from typing import Any

from fastapi import APIRouter, HTTPException

from propcalc.api.convert import (
    build_assumptions,
    build_properties,
    portfolio_response,
)
from propcalc.api.schemas import (
    PortfolioRequest,
    PortfolioResponse,
    ShareDecodeRequest,
    ShareEncodeRequest,
    ShareEncodeResponse,
)
from propcalc.data.portfolio import Portfolio, PortfolioFormatError, export_document, import_document
from propcalc.data.share import decode_share, encode_share, share_url
from propcalc.engine.migration import UnsupportedSchemaVersion
from propcalc.engine.validation import validate_property

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["portfolio"])


def _checked(portfolio: Portfolio) -> Portfolio:
    """Reject portfolios holding properties the engine should never see."""
    problems = {
        p.name or p.id: errors
        for p in portfolio.properties
        if (errors := validate_property(p))
    }
    if problems:
        raise HTTPException(status_code=422, detail=problems)
    return portfolio


@router.post("/portfolio/export")
async def export_portfolio(req: PortfolioRequest) -> dict[str, Any]:
    """Build the downloadable JSON document."""
    assumptions = build_assumptions(req.assumptions)
    properties = build_properties(req.properties, assumptions)
    return export_document(Portfolio(assumptions=assumptions, properties=properties))


@router.post("/portfolio/import", response_model=PortfolioResponse)
async def import_portfolio(document: dict[str, Any]):
    try:
        portfolio = import_document(document)
    except (PortfolioFormatError, UnsupportedSchemaVersion) as e:
        raise HTTPException(status_code=400, detail=str(e))
    return portfolio_response(_checked(portfolio))


@router.post("/share/encode", response_model=ShareEncodeResponse)
async def share_encode(req: ShareEncodeRequest):
    if not req.properties:
        raise HTTPException(status_code=400, detail="Add properties first")
    assumptions = build_assumptions(req.assumptions)
    properties = build_properties(req.properties, assumptions)
    encoded = encode_share(assumptions, properties)
    url = share_url(req.base_url, encoded) if req.base_url else None
    return ShareEncodeResponse(encoded=encoded, url=url)


@router.post("/share/decode", response_model=PortfolioResponse)
async def share_decode(req: ShareDecodeRequest):
    portfolio = decode_share(req.encoded)
    if portfolio is None:
        raise HTTPException(status_code=400, detail="Invalid share data")
    return portfolio_response(_checked(portfolio))
