"""Snapshot history.

A ``Sheet`` owns an append-only list of snapshots and a pointer to the
current one. Edits are applied to the current snapshot and the result is
appended; undo/redo only move the pointer, so every snapshot ever produced
stays reachable by its version number.

A Sheet is owned by one caller, which serialises edits. Callers sharing a
sheet can pass ``expected_version`` to get optimistic concurrency: the edit
is rejected with ``Conflict`` if the sheet has moved on since.
"""

import json
import logging
from collections.abc import Mapping

from .cells import Snapshot, as_snapshot, cells_from_dict, cells_to_dict
from .errors import Conflict
from .render import render
from .store import InsertRow, Position, UpdateCell, apply_command

logger = logging.getLogger(__name__)


def _is_version(value):
    return isinstance(value, int) and not isinstance(value, bool)


class Sheet:
    def __init__(self, states=None, version=None, parents=None):
        states = [as_snapshot(s) for s in states] if states else [Snapshot()]
        if version is None:
            version = len(states) - 1
        elif not _is_version(version) or not 0 <= version < len(states):
            raise ValueError(f"Version must be an int in 0..{len(states) - 1}, got {version!r}")
        if parents is None:
            parents = [None] + list(range(len(states) - 1))
        else:
            if not isinstance(parents, (list, tuple)):
                raise ValueError(f"Parent versions must be a list, got {parents!r}")
            parents = list(parents)
            if len(parents) != len(states) or parents[0] is not None or not all(
                    _is_version(p) and 0 <= p < i for i, p in enumerate(parents[1:], start=1)):
                raise ValueError(f"Invalid parent versions: {parents!r}")
        self._states = states
        # Version each snapshot was derived from; None for the first one
        self._parents = parents
        self._version = version

    def __len__(self):
        return len(self._states)

    def __repr__(self):
        return f"Sheet(version={self._version}, head={self.head})"

    @property
    def version(self):
        return self._version

    @property
    def head(self):
        return len(self._states) - 1

    @property
    def states(self):
        return tuple(self._states)

    @property
    def current(self):
        return self._states[self._version]

    def state(self, index):
        if not _is_version(index) or not 0 <= index < len(self._states):
            raise IndexError(f"Version {index} out of range 0..{self.head}")
        return self._states[index]

    def apply(self, command, expected_version=None):
        """Applies an edit command to the current snapshot and appends the result.

        Returns:
            int: the version of the new snapshot.

        Raises:
            Conflict: `expected_version` is given and is not the current version.
        """
        if expected_version is not None and expected_version != self._version:
            logger.warning("Rejected %r: expected version %s, sheet at %s",
                           command, expected_version, self._version)
            raise Conflict(expected_version, self._version)

        new_state = apply_command(self.current, command)
        self._states.append(new_state)
        self._parents.append(self._version)
        self._version = self.head
        logger.debug("Applied %r as version %d", command, self._version)
        return self._version

    def update_cell(self, index, value, expected_version=None):
        return self.apply(UpdateCell(index, value), expected_version)

    def insert_row(self, at, position=Position.AFTER, expected_version=None):
        return self.apply(InsertRow(at, position), expected_version)

    add_row = insert_row

    def undo(self):
        if self._version == 0:
            return False
        self._version -= 1
        return True

    def redo(self):
        if self._version == self.head:
            return False
        self._version += 1
        return True

    def checkout(self, version):
        self.state(version)
        self._version = version

    def parent(self, version=None):
        """Version the snapshot at `version` was derived from, or None for the first one."""
        version = self._version if version is None else version
        self.state(version)
        return self._parents[version]

    def changes(self, version=None):
        """Returns {address: (old_cell, new_cell)} for what `version` changed.

        The snapshot is compared with the one it was derived from, which is not
        necessarily the previous version after an undo. Missing cells are
        reported as None. Version 0 reports every cell as new.
        """
        parent = self.parent(version)
        after = self.state(self._version if version is None else version)
        before = Snapshot() if parent is None else self._states[parent]

        changed = {}
        for key in set(before) | set(after):
            old, new = before.get(key), after.get(key)
            if old != new:
                changed[key] = (old, new)
        return changed

    def render(self, version=None):
        return render(self.current if version is None else self.state(version))

    @classmethod
    def from_dict(cls, data):
        """Loads either persisted form.

        Legacy form: a single ``{address: cell}`` mapping.
        History form: ``{"states": [mapping, ...], "version": n}`` with an
        optional ``"parents"`` list, or a bare list of mappings.

        Raises:
            ValueError: a cell, the version or the parent list is invalid.
        """
        if isinstance(data, list):
            return cls([cells_from_dict(s) for s in data])
        if isinstance(data, Mapping) and isinstance(data.get('states'), list):
            states = [cells_from_dict(s) for s in data['states']]
            return cls(states, data.get('version'), data.get('parents'))
        return cls([cells_from_dict(data)])

    def to_dict(self):
        return {
            'states': [cells_to_dict(s) for s in self._states],
            'version': self._version,
            'parents': list(self._parents),
        }

    @classmethod
    def load(cls, path):
        with open(path, 'r') as f:
            return cls.from_dict(json.load(f))

    def save(self, path):
        with open(path, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)
