"""
Document Storage
================

Whole-document JSON persistence. Each document kind lives in its own file
under DATA_DIR:

    links.json    list of link objects
    theme.json    theme singleton
    profile.json  profile singleton
    auth.json     admin credentials singleton
    config.json   icon search credentials singleton

Every read returns a fresh deserialization and every write replaces the whole
file. Callers doing read-modify-write hold ``store.lock(kind)`` for the full
cycle.
"""

import json
import os
import tempfile
import threading
from contextlib import contextmanager

DOCUMENT_FILES = {
    'links': 'links.json',
    'theme': 'theme.json',
    'profile': 'profile.json',
    'auth': 'auth.json',
    'config': 'config.json',
}

COLLECTION_KINDS = {'links'}

DEFAULT_DOCUMENTS = {
    'links': [
        {
            'id': 'link-1',
            'label': 'GitHub',
            'url': 'https://github.com',
            'visualType': 'none',
            'imageUrl': '',
            'iconId': '',
            'iconUrl': '',
            'order': 0,
            'active': True,
        },
        {
            'id': 'link-2',
            'label': 'Twitter',
            'url': 'https://twitter.com',
            'visualType': 'none',
            'imageUrl': '',
            'iconId': '',
            'iconUrl': '',
            'order': 1,
            'active': True,
        },
        {
            'id': 'link-3',
            'label': 'LinkedIn',
            'url': 'https://linkedin.com',
            'visualType': 'none',
            'imageUrl': '',
            'iconId': '',
            'iconUrl': '',
            'order': 2,
            'active': True,
        },
    ],
    'theme': {
        'backgroundColor': '#f0f0f0',
        'backgroundImageUrl': '',
        'textColor': '#333333',
        'buttonColor': '#4a90e2',
        'buttonTextColor': '#ffffff',
    },
    'profile': {
        'photoUrl': '',
        'bio': '',
    },
    'config': {
        'nounProjectApiKey': '',
        'nounProjectApiSecret': '',
    },
}


class StorageError(Exception):
    """Base class for document storage failures"""

    def __init__(self, kind, path, message):
        super().__init__(message)
        self.kind = kind
        self.path = path


class DocumentNotFound(StorageError):
    def __init__(self, kind, path):
        super().__init__(kind, path, f"File not found: {path}")


class DocumentCorrupt(StorageError):
    def __init__(self, kind, path, reason):
        super().__init__(kind, path, f"Invalid JSON in file: {path} ({reason})")


class DocumentWriteError(StorageError):
    def __init__(self, kind, path, reason):
        super().__init__(kind, path, f"Error writing file {path}: {reason}")


class DocumentStore:
    """Reads and writes the JSON documents of one data directory"""

    def __init__(self, data_dir):
        self.data_dir = data_dir
        self._locks = {kind: threading.RLock() for kind in DOCUMENT_FILES}

    def path_for(self, kind):
        if kind not in DOCUMENT_FILES:
            raise ValueError(f"Unknown document kind: {kind}")
        return os.path.join(self.data_dir, DOCUMENT_FILES[kind])

    def exists(self, kind):
        return os.path.isfile(self.path_for(kind))

    @contextmanager
    def lock(self, kind):
        """Hold the per-kind lock for a read-modify-write cycle"""
        self.path_for(kind)
        with self._locks[kind]:
            yield

    def read(self, kind):
        """Load a document, raising DocumentNotFound / DocumentCorrupt"""
        path = self.path_for(kind)
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except FileNotFoundError:
            raise DocumentNotFound(kind, path)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise DocumentCorrupt(kind, path, str(e))
        except OSError as e:
            raise DocumentCorrupt(kind, path, e.strerror or str(e))

        expected = list if kind in COLLECTION_KINDS else dict
        if not isinstance(data, expected):
            raise DocumentCorrupt(kind, path, f"expected a JSON {'array' if expected is list else 'object'}")
        return data

    def write(self, kind, document):
        """Replace a document: write to a temp file, then rename over the target"""
        path = self.path_for(kind)
        try:
            payload = json.dumps(document, indent=2, ensure_ascii=False) + '\n'
        except (TypeError, ValueError) as e:
            raise DocumentWriteError(kind, path, str(e))

        tmp_path = None
        try:
            os.makedirs(self.data_dir, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(prefix=f'.{kind}-', suffix='.tmp', dir=self.data_dir)
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                f.write(payload)
            os.replace(tmp_path, path)
        except OSError as e:
            if tmp_path and os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise DocumentWriteError(kind, path, e.strerror or str(e))

    def seed_defaults(self, overwrite=False):
        """Write default documents for every missing kind except auth.

        Returns the list of kinds written.
        """
        written = []
        for kind, document in DEFAULT_DOCUMENTS.items():
            with self.lock(kind):
                if overwrite or not self.exists(kind):
                    self.write(kind, json.loads(json.dumps(document)))
                    written.append(kind)
        return written


def get_store():
    """DocumentStore of the running app"""
    from flask import current_app
    return current_app.extensions['linkpage'].store
