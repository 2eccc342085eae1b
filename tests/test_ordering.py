"""
Link ordering tests
===================

Pure-function tests for create/update/delete/reorder order arithmetic.
"""

import pytest

from linkpage.core.errors import InvalidInput, NotFound, UnknownReference
from linkpage.modules.links.models import LinkPatch, build_link
from linkpage.modules.links.ordering import (
    add_link, next_order, remove_link, reorder_links, sort_links, update_link
)


def make_links(*pairs):
    return [{'id': link_id, 'label': link_id, 'url': 'https://x.com', 'visualType': 'none',
             'imageUrl': '', 'iconId': '', 'iconUrl': '', 'order': order, 'active': True}
            for link_id, order in pairs]


def ids_in_order(links):
    return [link['id'] for link in sort_links(links)]


# ---------------------------------------------------------------------------
# Create
# ---------------------------------------------------------------------------

def test_first_link_gets_order_zero():
    links = []
    link = add_link(links, build_link({'label': 'A', 'url': 'https://a.com'}))
    assert link['order'] == 0


def test_second_link_gets_order_one():
    links = []
    add_link(links, build_link({'label': 'A', 'url': 'https://a.com'}))
    second = add_link(links, build_link({'label': 'B', 'url': 'https://b.com'}))
    assert second['order'] == 1


def test_new_link_appends_after_gaps():
    links = make_links(('A', 0), ('B', 7))
    assert next_order(links) == 8


def test_build_link_defaults():
    link = build_link({'label': ' GitHub ', 'url': ' https://github.com '})
    assert link['label'] == 'GitHub'
    assert link['url'] == 'https://github.com'
    assert link['visualType'] == 'none'
    assert link['active'] is True
    assert link['id']


def test_build_link_derives_image_visual_type():
    link = build_link({'label': 'A', 'url': 'https://a.com', 'imageUrl': 'https://a.com/a.png'})
    assert link['visualType'] == 'image'


@pytest.mark.parametrize('payload, code', [
    ({'url': 'https://a.com'}, 'INVALID_INPUT'),
    ({'label': 'A'}, 'INVALID_INPUT'),
    ({'label': 'A', 'url': 'ftp://a.com'}, 'INVALID_URL'),
    ({'label': 'A', 'url': 'https://a.com', 'imageUrl': 'nope'}, 'INVALID_IMAGE_URL'),
    ({'label': 'A', 'url': 'https://a.com', 'visualType': 'video'}, 'INVALID_VISUAL_TYPE'),
    ({'label': 'A', 'url': 'https://a.com', 'visualType': 'icon'}, 'INVALID_INPUT'),
    ({'label': 'A', 'url': 'https://a.com', 'visualType': 'image'}, 'INVALID_IMAGE_URL'),
])
def test_build_link_rejects_invalid(payload, code):
    with pytest.raises(InvalidInput) as exc:
        build_link(payload)
    assert exc.value.code == code


def test_build_icon_link():
    link = build_link({'label': 'A', 'url': 'https://a.com', 'visualType': 'icon',
                       'iconId': 123, 'iconUrl': 'https://static.thenounproject.com/123.png'})
    assert link['iconId'] == '123'
    assert link['visualType'] == 'icon'


# ---------------------------------------------------------------------------
# Update
# ---------------------------------------------------------------------------

def test_update_changes_only_supplied_fields():
    links = make_links(('A', 0), ('B', 1))
    link = update_link(links, 'B', LinkPatch.from_payload({'label': 'Bee'}))
    assert link['label'] == 'Bee'
    assert link['url'] == 'https://x.com'
    assert link['order'] == 1


def test_update_ignores_order_and_id():
    links = make_links(('A', 0), ('B', 1))
    update_link(links, 'A', LinkPatch.from_payload({'order': 99, 'id': 'Z', 'active': False}))
    assert links[0]['order'] == 0
    assert links[0]['id'] == 'A'
    assert links[0]['active'] is False


def test_update_rejects_inconsistent_visual_and_leaves_link_untouched():
    links = make_links(('A', 0))
    with pytest.raises(InvalidInput):
        update_link(links, 'A', LinkPatch.from_payload({'visualType': 'icon'}))
    assert links[0]['visualType'] == 'none'


def test_update_unknown_link():
    with pytest.raises(NotFound):
        update_link(make_links(('A', 0)), 'missing', LinkPatch.from_payload({'label': 'x'}))


def test_patch_rejects_bad_values():
    with pytest.raises(InvalidInput):
        LinkPatch.from_payload({'label': '   '})
    with pytest.raises(InvalidInput):
        LinkPatch.from_payload({'url': 'mailto:a@b.c'})
    with pytest.raises(InvalidInput):
        LinkPatch.from_payload({'active': 'yes'})


def test_patch_changes_only_lists_present_fields():
    patch = LinkPatch.from_payload({'label': 'x', 'active': False})
    assert patch.changes() == {'label': 'x', 'active': False}
    assert LinkPatch.from_payload({}).is_empty()


# ---------------------------------------------------------------------------
# Delete
# ---------------------------------------------------------------------------

def test_delete_keeps_relative_order_without_renumbering():
    links = make_links(('A', 0), ('B', 1), ('C', 2), ('D', 3))
    removed = remove_link(links, 'B')
    assert removed['id'] == 'B'
    assert ids_in_order(links) == ['A', 'C', 'D']
    assert [link['order'] for link in sort_links(links)] == [0, 2, 3]


def test_delete_unknown_link():
    with pytest.raises(NotFound):
        remove_link(make_links(('A', 0)), 'Z')


# ---------------------------------------------------------------------------
# Reorder
# ---------------------------------------------------------------------------

def test_partial_reorder_appends_unnamed_links():
    links = make_links(('A', 0), ('B', 1), ('C', 2))
    reorder_links(links, ['C', 'A'])
    orders = {link['id']: link['order'] for link in links}
    assert orders == {'C': 0, 'A': 1, 'B': 2}


def test_full_reorder():
    links = make_links(('A', 0), ('B', 1), ('C', 2))
    result = reorder_links(links, ['B', 'C', 'A'])
    assert [link['id'] for link in result] == ['B', 'C', 'A']
    assert [link['order'] for link in result] == [0, 1, 2]


def test_remainder_follows_previous_order_not_file_position():
    # File order differs from display order
    links = make_links(('D', 3), ('B', 1), ('A', 0), ('C', 2))
    reorder_links(links, ['C'])
    assert ids_in_order(links) == ['C', 'A', 'B', 'D']


def test_reorder_closes_gaps():
    links = make_links(('A', 0), ('B', 5), ('C', 9))
    reorder_links(links, [])
    assert sorted(link['order'] for link in links) == [0, 1, 2]
    assert ids_in_order(links) == ['A', 'B', 'C']


def test_unknown_id_rejects_whole_reorder():
    links = make_links(('A', 0), ('B', 1), ('C', 2))
    with pytest.raises(UnknownReference) as exc:
        reorder_links(links, ['C', 'nope', 'A'])
    assert exc.value.code == 'INVALID_LINK_ID'
    assert [link['order'] for link in links] == [0, 1, 2]


@pytest.mark.parametrize('payload', ['A,B', None, {'A': 0}, ['A', 1], ['A', 'A']])
def test_malformed_reorder_payload(payload):
    links = make_links(('A', 0), ('B', 1))
    with pytest.raises(InvalidInput):
        reorder_links(links, payload)
    assert [link['order'] for link in links] == [0, 1]


def test_reorder_subset_property():
    """Named ids come first in payload order, the rest keep prior relative order."""
    ids = [f'L{i}' for i in range(8)]
    links = make_links(*[(link_id, i * 2) for i, link_id in enumerate(ids)])
    payload = ['L6', 'L1', 'L4']
    reorder_links(links, payload)
    expected = payload + [link_id for link_id in ids if link_id not in payload]
    assert ids_in_order(links) == expected


def test_sort_links_filters_inactive():
    links = make_links(('A', 1), ('B', 0))
    links[1]['active'] = False
    assert [link['id'] for link in sort_links(links, active_only=True)] == ['A']
