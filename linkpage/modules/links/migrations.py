"""
Links Migrations
================

Brings links.json written by older versions up to the current link shape.
"""

from ...core.logging_service import LoggingService
from ...core.storage import StorageError


def upgrade_link(link):
    """Return (link, changed) with visualType/iconId/iconUrl filled in"""
    changed = False
    upgraded = dict(link)

    if not upgraded.get('visualType'):
        image_url = upgraded.get('imageUrl')
        has_image = isinstance(image_url, str) and bool(image_url.strip())
        upgraded['visualType'] = 'image' if has_image else 'none'
        changed = True

    for key in ('imageUrl', 'iconId', 'iconUrl'):
        if key not in upgraded:
            upgraded[key] = ''
            changed = True

    return upgraded, changed


def migrate_links(store):
    """Upgrade links.json in place. Returns True when the file was rewritten.

    Never raises on storage problems: a missing or broken links.json is logged
    and left for the API to report.
    """
    try:
        with store.lock('links'):
            links = store.read('links')
            upgraded = []
            migrated = False
            for link in links:
                if not isinstance(link, dict):
                    upgraded.append(link)
                    continue
                new_link, changed = upgrade_link(link)
                upgraded.append(new_link)
                migrated = migrated or changed

            if migrated:
                store.write('links', upgraded)
                LoggingService.info('links', 'Links migration completed: visualType field added to existing links')
            return migrated
    except StorageError as e:
        LoggingService.warning('links', f'Links migration skipped: {e}')
        return False
