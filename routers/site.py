from fastapi import APIRouter, HTTPException

from content.site import PAGES

router = APIRouter()


@router.get("")
def list_pages():
    return {"pages": list(PAGES)}


@router.get("/{page}")
def get_page(page: str):
    build = PAGES.get(page)
    if build is None:
        raise HTTPException(status_code=404, detail="Page not found")
    return build()
