import logging

from flask import Blueprint, jsonify, request

from contest_tracker.contests import contest_key
from contest_tracker.services.bookmark_service import BookmarkStore
from contest_tracker.services.contest_service import ContestService
from contest_tracker.views.contests import platform_choices

logger = logging.getLogger(__name__)

api_bp = Blueprint('api', __name__, url_prefix='/api')


@api_bp.route('/contests')
def contests():
    store = BookmarkStore.from_request(request)
    listing = ContestService().list_contests(
        platform=request.args.get('platform'),
        query=request.args.get('contest'),
        bookmarks=store.items,
    )
    return jsonify(listing.to_dict())


@api_bp.route('/platforms')
def platforms():
    return jsonify({'platforms': platform_choices()})


@api_bp.route('/bookmarks')
def bookmarks():
    store = BookmarkStore.from_request(request)
    return jsonify({'bookmarks': store.items, 'ids': store.ids()})


@api_bp.route('/bookmark', methods=['POST'])
def toggle_bookmark():
    """Add or remove a bookmarked contest snapshot.

    Body: ``{"action": "add" | "remove", "contest": {...}}``
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({'error': 'Expected a JSON object'}), 400

    action = data.get('action')
    contest = data.get('contest')
    if action not in ('add', 'remove'):
        return jsonify({'error': f'Unknown action: {action}'}), 400
    if not isinstance(contest, dict) or not contest_key(contest):
        return jsonify({'error': 'Contest must be an object with an id or name'}), 400

    store = BookmarkStore.from_request(request)
    if action == 'add':
        changed = store.add(contest)
    else:
        changed = store.remove(contest)
    logger.info(f"Bookmark {action} {contest_key(contest)!r} (changed={changed})")

    response = jsonify({'success': True, 'changed': changed, 'ids': store.ids()})
    return store.apply(response)
