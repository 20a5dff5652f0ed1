from typing import Dict, Iterable, Iterator, List


class SelectionSet:
    """
    Directory names chosen during one interactive session.
    Insertion order is kept so launches open directories in the order they were picked.
    """
    def __init__(self, names: Iterable[str] = ()):
        self._names: Dict[str, None] = dict.fromkeys(names)

    def toggle(self, name: str) -> bool:
        """Flip membership of ``name`` and return whether it is now selected."""
        if name in self._names:
            del self._names[name]
            return False
        self._names[name] = None
        return True

    def add(self, name: str) -> None:
        self._names[name] = None

    def clear(self) -> None:
        self._names.clear()

    def names(self) -> List[str]:
        return list(self._names)

    def __contains__(self, name: object) -> bool:
        return name in self._names

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._names))

    def __len__(self) -> int:
        return len(self._names)

    def __repr__(self) -> str:
        return f"SelectionSet({self.names()!r})"
