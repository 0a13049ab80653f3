from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ConfigDict, Field
from segno import DataOverflowError

from downpress.config import get_settings
from downpress.games.models import Game
from downpress.games.store import merge_rows, share_snapshot
from downpress.security import require_api_key
from downpress.share import ShareableScoreData, build_share_payload, qr_svg

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/games",
    tags=["share"],
    dependencies=[Depends(require_api_key)],
)


class ShareOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    payload: str
    qr_svg: str | None = Field(default=None, alias="qrSvg")


class ShareImportIn(BaseModel):
    payload: str


@router.get("/{game_id}/share", response_model=ShareOut)
def export_scores(game_id: str):
    game = share_snapshot(game_id)
    if not game:
        raise HTTPException(status_code=404, detail="game_not_found")

    payload = build_share_payload(game).to_qr_string()
    try:
        svg = qr_svg(payload, size=get_settings().share_qr_size)
    except DataOverflowError:
        logger.exception("share payload for game %s does not fit a QR code", game_id)
        svg = None
    return ShareOut(payload=payload, qr_svg=svg)


@router.post("/{game_id}/share/import", response_model=Game)
def import_scores(game_id: str, body: ShareImportIn):
    shared = ShareableScoreData.from_qr_string(body.payload)
    if shared is None:
        raise HTTPException(status_code=400, detail="invalid_share_payload")

    rows = shared.score_rows()
    players = [player.to_player() for player in shared.players if player.id in rows]
    game = merge_rows(game_id, rows, players=players)
    if not game:
        raise HTTPException(status_code=404, detail="game_not_found")
    logger.info(
        "imported %d score rows from group %s into game %s",
        len(rows),
        shared.group_id,
        game_id,
    )
    return game


__all__ = ["router"]
