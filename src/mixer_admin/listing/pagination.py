"""
Page-number window for the pagination control.
"""

from dataclasses import asdict, dataclass, field

PAGE_SIZES = [5, 10, 20, 50]
MAX_VISIBLE_PAGES = 5


@dataclass
class PageWindow:
    """
    Page buttons to render.

    Attributes:
        pages: Consecutive page numbers shown as buttons.
        show_first: Render a jump to page 1 before the window.
        leading_ellipsis: Render "..." between page 1 and the window.
        trailing_ellipsis: Render "..." between the window and the last page.
        show_last: Render a jump to the last page after the window.
    """

    pages: list[int] = field(default_factory=list)
    show_first: bool = False
    leading_ellipsis: bool = False
    trailing_ellipsis: bool = False
    show_last: bool = False

    def to_dict(self) -> dict:
        return asdict(self)


def page_window(
    current_page: int, total_pages: int, max_visible: int = MAX_VISIBLE_PAGES
) -> PageWindow:
    """
    Compute the visible page numbers around ``current_page``.

    The window is centred on the current page where possible and shifted
    to stay within ``1..total_pages``; the current page is always inside it.

    Examples:
        page_window(1, 10) -> pages 1-5, trailing ellipsis, last page
        page_window(10, 10) -> pages 6-10, first page, leading ellipsis
    """
    if total_pages < 1:
        return PageWindow()
    max_visible = max(max_visible, 1)
    current_page = min(max(current_page, 1), total_pages)

    start = max(1, current_page - max_visible // 2)
    end = min(total_pages, start + max_visible - 1)
    start = max(1, end - max_visible + 1)

    return PageWindow(
        pages=list(range(start, end + 1)),
        show_first=start > 1,
        leading_ellipsis=start > 2,
        trailing_ellipsis=end < total_pages - 1,
        show_last=end < total_pages,
    )
