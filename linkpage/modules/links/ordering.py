"""
Link Ordering
=============

Pure functions that keep the ``order`` field consistent. Display order is
always derived by sorting on ``order``; values are unique, and gaps left by
deletes are harmless until the next reorder renumbers everything.
"""

from ...core.errors import InvalidInput, NotFound, UnknownReference
from .models import check_visual


def _order_key(indexed_link):
    index, link = indexed_link
    order = link.get('order')
    # Links with a missing/garbled order sort last, in file order
    if not isinstance(order, int) or isinstance(order, bool):
        return (1, 0, index)
    return (0, order, index)


def sort_links(links, active_only=False):
    """Links sorted by order ascending; ties keep their file position"""
    ordered = [link for _, link in sorted(enumerate(links), key=_order_key)]
    if active_only:
        ordered = [link for link in ordered if link.get('active')]
    return ordered


def next_order(links):
    """Order for a newly appended link: max + 1, or 0 for an empty collection"""
    orders = [
        link['order'] for link in links
        if isinstance(link.get('order'), int) and not isinstance(link.get('order'), bool)
    ]
    return max(orders) + 1 if orders else 0


def find_link(links, link_id):
    for index, link in enumerate(links):
        if link.get('id') == link_id:
            return index, link
    raise NotFound('Link not found')


def add_link(links, link):
    """Append a new link at the end of the display order"""
    link['order'] = next_order(links)
    links.append(link)
    return link


def update_link(links, link_id, patch):
    """Apply a LinkPatch in place; order and id never change here"""
    _, link = find_link(links, link_id)
    candidate = dict(link)
    candidate.update(patch.changes())
    check_visual(candidate)
    link.update(patch.changes())
    return link


def remove_link(links, link_id):
    """Remove a link without renumbering the rest"""
    index, _ = find_link(links, link_id)
    return links.pop(index)


def reorder_links(links, link_ids):
    """
    Assign order from a full or partial list of ids.

    Named links take their index in ``link_ids``. Links not named are appended
    after them, keeping their previous relative order. Validation happens
    before anything is touched, so a rejected payload leaves ``links`` as it
    was.

    Returns the links sorted by their new order.
    """
    if not isinstance(link_ids, list):
        raise InvalidInput('linkIds must be an array')
    if not all(isinstance(link_id, str) for link_id in link_ids):
        raise InvalidInput('linkIds must contain only link IDs')
    if len(set(link_ids)) != len(link_ids):
        raise InvalidInput('linkIds must not contain duplicates')

    by_id = {link.get('id'): link for link in links}
    for link_id in link_ids:
        if link_id not in by_id:
            raise UnknownReference(f'Link with ID {link_id} not found')

    named = set(link_ids)
    remainder = [link for link in sort_links(links) if link.get('id') not in named]

    for position, link_id in enumerate(link_ids):
        by_id[link_id]['order'] = position
    for offset, link in enumerate(remainder):
        link['order'] = len(link_ids) + offset

    return sort_links(links)
