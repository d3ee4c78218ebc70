def make_page(items, next_url=None):
    return {"items": items, "next": next_url, "limit": len(items), "total": len(items)}


def track_item(uri, item_type="track"):
    return {"track": {"uri": uri, "type": item_type, "id": uri.split(":")[-1], "name": uri}}


def chain_pages(*pages):
    """ link pages via `next` / `_next_page` and return the first one """
    for page, following in zip(pages, pages[1:]):
        page["next"] = "https://api.spotify.com/next"
        page["_next_page"] = following
    return pages[0]
