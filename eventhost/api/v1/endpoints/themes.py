# eventhost/api/v1/endpoints/themes.py
from typing import List

from fastapi import APIRouter, HTTPException, status

from eventhost.core.themes import THEMES, get_theme
from eventhost.schemas.theme import Theme

router = APIRouter(tags=["Themes"])


@router.get("/themes", response_model=List[Theme])
def list_themes():
    return THEMES


@router.get("/themes/{theme_id}", response_model=Theme)
def get_theme_by_id(theme_id: str):
    theme = get_theme(theme_id)
    if theme is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Theme '{theme_id}' not found",
        )
    return theme
