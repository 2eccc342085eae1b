"""
Icon Search Routes
==================

GET /api/admin/icons/search?query=<term>&limit=<n>
"""

from flask import jsonify, request

from . import icons_admin_bp
from .service import NounProjectService
from ..auth.utils import admin_required
from ..settings.helpers import read_icon_config
from ...core.config import get_config_value
from ...core.errors import InvalidInput

MAX_QUERY_LENGTH = 100
MAX_LIMIT = 50


def build_icon_service():
    """Service built from the stored credentials; they are re-read on every call"""
    config = read_icon_config()
    return NounProjectService(
        api_key=config['nounProjectApiKey'],
        api_secret=config['nounProjectApiSecret'],
        base_url=get_config_value('NOUN_PROJECT_API_URL'),
        timeout=float(get_config_value('ICON_SEARCH_TIMEOUT', 10)),
    )


@icons_admin_bp.route('/search', methods=['GET'])
@admin_required
def search_icons():
    query = (request.args.get('query') or '').strip()
    if not query:
        raise InvalidInput('Search query is required')
    if len(query) > MAX_QUERY_LENGTH:
        raise InvalidInput(f'Search query must be {MAX_QUERY_LENGTH} characters or less')

    default_limit = int(get_config_value('ICON_SEARCH_LIMIT', 20))
    try:
        limit = int(request.args.get('limit', default_limit))
    except ValueError:
        raise InvalidInput('limit must be a number')
    if not 1 <= limit <= MAX_LIMIT:
        raise InvalidInput(f'limit must be between 1 and {MAX_LIMIT}')

    with build_icon_service() as service:
        results = service.search(query, limit=limit)
    return jsonify({'results': results})
