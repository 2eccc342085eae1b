"""
Links Routes
============

Admin CRUD + reorder, and the public active-link list.
Every write holds the links lock for the whole read-modify-write cycle.
"""

from flask import jsonify, request, session

from . import links_admin_bp, links_bp
from .models import LinkPatch, build_link
from .ordering import add_link, remove_link, reorder_links, sort_links, update_link
from ..auth.utils import admin_required
from ...core.errors import InvalidInput
from ...core.logging_service import LoggingService
from ...core.storage import get_store


def _json_body():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise InvalidInput('Request body must be a JSON object')
    return data


# ===== Admin Routes =====

@links_admin_bp.route('', methods=['GET'])
@admin_required
def get_links():
    """All links for editing, including inactive ones"""
    links = get_store().read('links')
    return jsonify(sort_links(links))


@links_admin_bp.route('', methods=['POST'])
@admin_required
def create_link():
    """Create a new link at the end of the list"""
    link = build_link(_json_body())

    store = get_store()
    with store.lock('links'):
        links = store.read('links')
        add_link(links, link)
        store.write('links', links)

    LoggingService.log_user_action('links', 'link created', session.get('username'), {
        'id': link['id'], 'order': link['order'],
    })
    return jsonify(link), 201


# Registered before /<link_id> so 'reorder' is never taken for an id
@links_admin_bp.route('/reorder', methods=['PUT'])
@admin_required
def reorder():
    """Reorder links; body: {"linkIds": [id1, id2, ...]} in display order"""
    data = _json_body()
    if 'linkIds' not in data:
        raise InvalidInput('linkIds must be an array')

    store = get_store()
    with store.lock('links'):
        links = store.read('links')
        ordered = reorder_links(links, data['linkIds'])
        store.write('links', links)

    LoggingService.log_user_action('links', 'links reordered', session.get('username'), {
        'named': len(data['linkIds']), 'total': len(links),
    })
    return jsonify({
        'success': True,
        'message': 'Links reordered successfully',
        'links': ordered
    })


@links_admin_bp.route('/<link_id>', methods=['PUT'])
@admin_required
def edit_link(link_id):
    """Update only the fields present in the body"""
    patch = LinkPatch.from_payload(_json_body())

    store = get_store()
    with store.lock('links'):
        links = store.read('links')
        link = update_link(links, link_id, patch)
        if not patch.is_empty():
            store.write('links', links)

    LoggingService.log_user_action('links', 'link updated', session.get('username'), {
        'id': link_id, 'fields': sorted(patch.changes()),
    })
    return jsonify(link)


@links_admin_bp.route('/<link_id>', methods=['DELETE'])
@admin_required
def delete_link(link_id):
    store = get_store()
    with store.lock('links'):
        links = store.read('links')
        deleted = remove_link(links, link_id)
        store.write('links', links)

    LoggingService.log_user_action('links', 'link deleted', session.get('username'), {'id': link_id})
    return jsonify({
        'success': True,
        'message': 'Link deleted successfully',
        'deletedLink': deleted
    })


# ===== Public Routes =====

@links_bp.route('', methods=['GET'])
def get_public_links():
    """Active links in display order"""
    links = get_store().read('links')
    return jsonify(sort_links(links, active_only=True))
