"""Per-user RSS feed endpoint."""
from fastapi import APIRouter, Depends, HTTPException, Response

from api.dependencies import get_feed_assembler, get_user_service
from services.exceptions import NotFoundError
from services.feed_service import FeedAssembler
from services.user_service import FEED_NOT_FOUND_MESSAGE, UserService

router = APIRouter(prefix="/feeds", tags=["feeds"])

RSS_MEDIA_TYPE = "application/rss+xml"


@router.get("/{feed_id}", response_class=Response)
async def get_feed(
    feed_id: str,
    users: UserService = Depends(get_user_service),
    assembler: FeedAssembler = Depends(get_feed_assembler),
) -> Response:
    """
    Serve a user's feed of recent downloads as RSS.

    Unknown and malformed feed ids both return the same 404. A successful response
    marks the feed as checked.
    """
    try:
        user = await users.get_by_feed_token(feed_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=FEED_NOT_FOUND_MESSAGE) from e

    rss = await assembler.render(user)
    await users.touch_feed_checked(user)
    return Response(content=rss, media_type=RSS_MEDIA_TYPE)
