"""
Copyright 2026 suntools-shapely authors and contributors

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at

    http://www.apache.org/licenses/LICENSE-2.0

Unless required by applicable law or agreed to in writing, software
distributed under the License is distributed on an "AS IS" BASIS,
WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
See the License for the specific language governing permissions and
limitations under the License.

Path-keyed output container.

Every multi-dimensional result (per source, per panel, per sun vector) is
stored as ordered item lists keyed by an integer path such as (2, 0).
Branches keep insertion order, so trees built in the same loop order stay
aligned branch for branch.
"""

from typing import Any, Callable, Dict, Iterator, List, Optional, Tuple

Path = Tuple[int, ...]


def format_path(path: Path) -> str:
    """Render a path the way tree viewers show it: (0, 3) -> '{0;3}'."""
    return '{' + ';'.join(str(i) for i in path) + '}'


class DataTree:
    """Ordered mapping from integer paths to lists of items."""

    def __init__(self):
        self._branches: Dict[Path, List[Any]] = {}

    @staticmethod
    def _key(path) -> Path:
        if isinstance(path, int):
            return (path,)
        return tuple(int(i) for i in path)

    def ensure(self, path) -> List[Any]:
        """Return the branch at ``path``, creating it empty if needed."""
        return self._branches.setdefault(self._key(path), [])

    def append(self, path, item: Any) -> None:
        self.ensure(path).append(item)

    def extend(self, path, items) -> None:
        self.ensure(path).extend(items)

    def branch(self, path) -> List[Any]:
        """A copy of the items at ``path`` (empty when the path is absent)."""
        return list(self._branches.get(self._key(path), []))

    @property
    def paths(self) -> List[Path]:
        return list(self._branches)

    def items(self) -> Iterator[Tuple[Path, List[Any]]]:
        for path, branch in self._branches.items():
            yield path, list(branch)

    def flatten(self) -> List[Any]:
        """All items, branch by branch."""
        return [item for branch in self._branches.values() for item in branch]

    @property
    def item_count(self) -> int:
        return sum(len(b) for b in self._branches.values())

    def to_dict(self, convert: Optional[Callable[[Any], Any]] = None) -> Dict[str, List[Any]]:
        """
        Plain-dict view keyed '{i;j}', optionally converting each item.

        Useful for JSON export: pass a converter that turns geometry into
        coordinate lists.
        """
        convert = convert or (lambda item: item)
        return {format_path(path): [convert(item) for item in branch]
                for path, branch in self._branches.items()}

    def __contains__(self, path) -> bool:
        return self._key(path) in self._branches

    def __iter__(self) -> Iterator[Path]:
        return iter(list(self._branches))

    def __len__(self) -> int:
        return len(self._branches)

    def __repr__(self) -> str:
        return f"DataTree(branches={len(self)}, items={self.item_count})"
