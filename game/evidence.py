"""Evidence bookkeeping."""

from typing import Iterable, Optional


class EvidenceLedger:
    """Ordered set of evidence file names collected so far.

    Names are only ever removed by ``rm`` inside the evidence-intake
    directory.

    Args:
        names: Names already collected (e.g. from a save).
    """

    def __init__(self, names: Optional[Iterable[str]] = None) -> None:
        self._names: list[str] = []
        for name in names or ():
            self.collect(name)

    def collect(self, name: str) -> bool:
        """Record ``name``; a second collection is a no-op.

        Returns:
            True if the name was newly added.
        """
        if name in self._names:
            return False
        self._names.append(name)
        return True

    def has(self, name: str) -> bool:
        return name in self._names

    def count(self) -> int:
        return len(self._names)

    def remove(self, name: str) -> bool:
        """Forget ``name``.

        Returns:
            True if the name was present.
        """
        if name not in self._names:
            return False
        self._names.remove(name)
        return True

    def names(self) -> list[str]:
        return list(self._names)

    def reset(self, names: Iterable[str] = ()) -> None:
        self._names = []
        for name in names:
            self.collect(name)

    def __contains__(self, name: object) -> bool:
        return name in self._names

    def __len__(self) -> int:
        return len(self._names)
