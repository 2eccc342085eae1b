"""
Links Models
============

Request parsing for link create/update. A create payload becomes a complete
link dict; an update payload becomes a LinkPatch holding only the fields the
client actually sent.
"""

import uuid
from dataclasses import dataclass, fields

from ...core.errors import InvalidInput
from ...core.validators import (
    VISUAL_TYPES, is_optional_url, is_valid_url, is_valid_visual_type
)

LINK_FIELDS = ('id', 'label', 'url', 'visualType', 'imageUrl', 'iconId', 'iconUrl', 'order', 'active')


class _Unset:
    def __repr__(self):
        return 'UNSET'

    def __bool__(self):
        return False


UNSET = _Unset()


def generate_link_id():
    return str(uuid.uuid4())


def _string_field(data, key, required=False):
    value = data.get(key, UNSET)
    if value is UNSET or value is None:
        if required:
            raise InvalidInput('Label and URL are required')
        return UNSET if value is UNSET else ''
    if not isinstance(value, str):
        raise InvalidInput(f'{key} must be a string')
    return value.strip()


def _check_url(value, field_name):
    if value is UNSET:
        return
    if field_name == 'url':
        if not is_valid_url(value):
            raise InvalidInput('Invalid URL format. URL must start with http:// or https://', 'INVALID_URL')
    elif not is_optional_url(value):
        code = 'INVALID_IMAGE_URL' if field_name == 'imageUrl' else 'INVALID_URL'
        raise InvalidInput(f'Invalid {field_name} format. Must be a valid URL', code)


def check_visual(link):
    """Raise InvalidInput unless the link's visual fields agree with its visualType"""
    visual_type = link.get('visualType', 'none')
    if not is_valid_visual_type(visual_type):
        raise InvalidInput(
            f"visualType must be one of: {', '.join(VISUAL_TYPES)}", 'INVALID_VISUAL_TYPE'
        )
    if visual_type == 'image' and not is_valid_url(link.get('imageUrl', '')):
        raise InvalidInput('An image link needs a valid imageUrl', 'INVALID_IMAGE_URL')
    if visual_type == 'icon':
        if not link.get('iconId'):
            raise InvalidInput('An icon link needs an iconId', 'INVALID_INPUT')
        if not is_valid_url(link.get('iconUrl', '')):
            raise InvalidInput('An icon link needs a valid iconUrl', 'INVALID_URL')


def build_link(data):
    """Validate a create payload and return a new link dict (order unassigned)"""
    if not isinstance(data, dict):
        raise InvalidInput('Request body must be a JSON object')

    label = _string_field(data, 'label', required=True)
    url = _string_field(data, 'url', required=True)
    if not label or not url:
        raise InvalidInput('Label and URL are required')
    _check_url(url, 'url')

    image_url = _string_field(data, 'imageUrl') or ''
    icon_id = data.get('iconId')
    icon_id = '' if icon_id is None else str(icon_id).strip()
    icon_url = _string_field(data, 'iconUrl') or ''
    _check_url(image_url, 'imageUrl')
    _check_url(icon_url, 'iconUrl')

    visual_type = data.get('visualType')
    if visual_type is None:
        visual_type = 'image' if image_url else 'none'

    active = data.get('active', True)
    if not isinstance(active, bool):
        raise InvalidInput('active must be true or false')

    link = {
        'id': generate_link_id(),
        'label': label,
        'url': url,
        'visualType': visual_type,
        'imageUrl': image_url,
        'iconId': icon_id,
        'iconUrl': icon_url,
        'order': None,
        'active': active,
    }
    check_visual(link)
    return link


@dataclass
class LinkPatch:
    """Fields supplied by an edit; anything left UNSET is not touched"""
    label: object = UNSET
    url: object = UNSET
    visualType: object = UNSET
    imageUrl: object = UNSET
    iconId: object = UNSET
    iconUrl: object = UNSET
    active: object = UNSET

    @classmethod
    def from_payload(cls, data):
        if not isinstance(data, dict):
            raise InvalidInput('Request body must be a JSON object')

        patch = cls()
        for key in ('label', 'url', 'imageUrl', 'iconUrl'):
            setattr(patch, key, _string_field(data, key))

        if patch.label is not UNSET and not patch.label:
            raise InvalidInput('Label cannot be empty')
        _check_url(patch.url, 'url')
        _check_url(patch.imageUrl, 'imageUrl')
        _check_url(patch.iconUrl, 'iconUrl')

        if 'iconId' in data:
            icon_id = data['iconId']
            patch.iconId = '' if icon_id is None else str(icon_id).strip()

        if 'visualType' in data:
            if not is_valid_visual_type(data['visualType']):
                raise InvalidInput(
                    f"visualType must be one of: {', '.join(VISUAL_TYPES)}", 'INVALID_VISUAL_TYPE'
                )
            patch.visualType = data['visualType']

        if 'active' in data:
            if not isinstance(data['active'], bool):
                raise InvalidInput('active must be true or false')
            patch.active = data['active']

        return patch

    def changes(self):
        """Supplied fields only"""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not UNSET
        }

    def is_empty(self):
        return not self.changes()
