"""Read every row a repository query matches, one page at a time."""

PAGE_SIZE = 100


def fetch_all(query, page_size: int = PAGE_SIZE) -> list:
    """Return all items of ``query``; a bare ``.all()`` stops at the default page."""
    items = []
    offset = 0
    while True:
        page = query.offset(offset).limit(page_size).all().items
        items.extend(page)
        if len(page) < page_size:
            return items
        offset += page_size
