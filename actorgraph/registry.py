"""
Bidirectional actor name <-> dense integer id mapping.

Ids are assigned in first-seen order starting at zero and stay stable for the
lifetime of the registry.
"""

from typing import Dict, Iterator, List

from actorgraph.errors import UnknownActorError


class ActorRegistry:
    """Dense id arena for actor names."""

    def __init__(self):
        self._name_to_id: Dict[str, int] = {}
        self._id_to_name: List[str] = []

    def register(self, name: str) -> int:
        """Return the id of *name*, assigning the next free id on first sight."""
        actor_id = self._name_to_id.get(name)
        if actor_id is None:
            actor_id = len(self._id_to_name)
            self._name_to_id[name] = actor_id
            self._id_to_name.append(name)
        return actor_id

    def lookup(self, name: str) -> int:
        try:
            return self._name_to_id[name]
        except KeyError:
            raise UnknownActorError(name) from None

    def name(self, actor_id: int) -> str:
        return self._id_to_name[actor_id]

    def names(self) -> List[str]:
        return list(self._id_to_name)

    def __contains__(self, name) -> bool:
        return name in self._name_to_id

    def __len__(self) -> int:
        return len(self._id_to_name)

    def __iter__(self) -> Iterator[str]:
        return iter(self._id_to_name)
