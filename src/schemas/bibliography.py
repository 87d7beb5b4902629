"""Bibliography store schema.

The bibliography maps citation keys to pre-rendered HTML citation fragments.
Hand-authored entries are loaded from ``bibliography.json``; every spec in the
corpus then contributes a self-citation keyed by its short name.
"""

import re
from types import MappingProxyType
from typing import Mapping

from pydantic import RootModel, field_validator

CITATION_KEY_PATTERN = re.compile(r"^[\w-]+$")


class Bibliography(RootModel[dict[str, str]]):
    """Mutable bibliography store used while the corpus is being indexed.

    Keys must match ``[\\w-]+`` so that they can be cited with ``[[key]]``.
    """

    @field_validator("root")
    @classmethod
    def _check_keys(cls, value: dict[str, str]) -> dict[str, str]:
        bad = [key for key in value if not CITATION_KEY_PATTERN.match(key)]
        if bad:
            raise ValueError(f"invalid citation keys: {', '.join(sorted(bad))}")
        return value

    def __contains__(self, key: str) -> bool:
        return key in self.root

    def __getitem__(self, key: str) -> str:
        return self.root[key]

    def __len__(self) -> int:
        return len(self.root)

    def put(self, key: str, fragment: str) -> str | None:
        """Insert an entry, returning the fragment it replaced (if any)."""
        previous = self.root.get(key)
        self.root[key] = fragment
        return previous

    def freeze(self) -> Mapping[str, str]:
        """Return a read-only view for the resolution phase."""
        return MappingProxyType(dict(self.root))
