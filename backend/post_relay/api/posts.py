from collections.abc import AsyncIterator

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import JSONResponse

from ..schemas import Post
from ..services.remote_posts import RemotePostFetcher, UpstreamError


router = APIRouter()


async def get_remote_posts() -> AsyncIterator[RemotePostFetcher]:
    """FastAPI dependency that yields a fetcher and closes its transport afterwards."""
    fetcher = RemotePostFetcher()
    try:
        yield fetcher
    finally:
        await fetcher.aclose()


# JSONResponse: the upstream body goes out as received, without response_model validation.
@router.get("/posts", response_model=list[Post])
async def list_posts(fetcher: RemotePostFetcher = Depends(get_remote_posts)) -> JSONResponse:
    try:
        posts = await fetcher.fetch_all()
    except UpstreamError as exc:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=exc.message) from exc
    return JSONResponse([post.to_wire() for post in posts])


@router.get("/posts/{post_id}", response_model=Post)
async def get_post(post_id: int, fetcher: RemotePostFetcher = Depends(get_remote_posts)) -> JSONResponse:
    try:
        post = await fetcher.fetch_by_id(post_id)
    except UpstreamError as exc:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=exc.message) from exc
    return JSONResponse(post.to_wire())
