from flask import Blueprint, current_app, render_template, request

from contest_tracker.contests import ALL_PLATFORMS, BOOKMARKS_PLATFORM
from contest_tracker.services.bookmark_service import BookmarkStore
from contest_tracker.services.contest_service import ContestService
from contest_tracker.sources import get_all_sources

contests_bp = Blueprint('contests', __name__)


def platform_choices():
    """Filter buttons: all platforms, every registered source, bookmarks."""
    choices = [{'name': 'All Platforms', 'value': ALL_PLATFORMS}]
    for name, cls in get_all_sources(current_app.config.get('SOURCE_ORDER')).items():
        choices.append({'name': cls.PLATFORM_DISPLAY, 'value': name})
    choices.append({'name': 'Bookmarks', 'value': BOOKMARKS_PLATFORM})
    return choices


@contests_bp.route('/')
def index():
    store = BookmarkStore.from_request(request)
    listing = ContestService().list_contests(
        platform=request.args.get('platform'),
        query=request.args.get('contest'),
        bookmarks=store.items,
    )
    return render_template(
        'contests/index.html',
        listing=listing,
        platforms=platform_choices(),
        current_platform=listing.platform or ALL_PLATFORMS,
        search_query=listing.query or '',
    )
