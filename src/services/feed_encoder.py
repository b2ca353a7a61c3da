"""RSS 2.0 encoding of feed documents."""
from feedgen.feed import FeedGenerator

from schemas.feed import FeedDocument
from services.exceptions import SerializationError
from services.utils import ensure_utc


def encode_rss(document: FeedDocument) -> str:
    """
    Encode a feed document as an RSS 2.0 string.

    Entries keep the order they have in the document.

    Raises:
        SerializationError: If the document cannot be encoded (e.g. text that is not
            valid XML).
    """
    try:
        generator = FeedGenerator()
        generator.title(document.title)
        generator.description(document.title)
        generator.link(href=document.link, rel="alternate")
        generator.link(href=document.link, rel="self")
        generator.pubDate(ensure_utc(document.created))

        for entry in document.entries:
            item = generator.add_entry(order="append")
            # Items need a title; torrents from the metadata source may have none.
            item.title(entry.title.strip() or entry.link)
            item.link(href=entry.link)
            item.guid(entry.link, permalink=False)
            item.pubDate(ensure_utc(entry.created))

        return generator.rss_str(pretty=True).decode("utf-8")
    except (ValueError, TypeError) as e:
        raise SerializationError(f"Failed to encode feed: {e}") from e
