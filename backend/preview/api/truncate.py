"""Truncation endpoints for content previews."""

import logging

from fastapi import APIRouter, HTTPException
from pydantic import ValidationError
from soupsieve import SelectorSyntaxError

from preview.api.schemas import (
    TextTruncateOut,
    TextTruncateRequest,
    TruncateOut,
    TruncateRequest,
)
from preview.services.truncate import truncate_markup, truncate_plain

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/truncate", tags=["truncate"])


@router.post("", response_model=TruncateOut)
async def truncate_html(req: TruncateRequest):
    """Truncate markup, keeping the tag structure well formed."""
    try:
        result = truncate_markup(req.html, req.length, req.options)
    except SelectorSyntaxError as exc:
        logger.warning("Rejected exclude selector: %s", exc)
        raise HTTPException(422, f"Invalid exclude selector: {exc}")
    except ValidationError as exc:
        raise HTTPException(
            422, exc.errors(include_url=False, include_context=False)
        )
    return TruncateOut(html=result.output, truncated=result.truncated)


@router.post("/text", response_model=TextTruncateOut)
async def truncate_text_endpoint(req: TextTruncateRequest):
    """Truncate plain text with the same counting rules."""
    try:
        result = truncate_plain(req.text, req.length, req.options)
    except ValidationError as exc:
        raise HTTPException(
            422, exc.errors(include_url=False, include_context=False)
        )
    return TextTruncateOut(text=result.output, truncated=result.truncated)
