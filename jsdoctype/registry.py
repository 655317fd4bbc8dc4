"""
Typedef names, as declared so far in one unit of source.

This is a lightly enhanced dictionary. Unlike a scope, it does not mind
duplicate keys: the later definition shadows the earlier one. It hands back
whatever it displaced, so a caller can complain if it cares to.

Give each scanned unit its own registry. Nothing here is synchronized.
"""
from typing import Iterator, Optional
from .algebra import JSType

class TypedefRegistry:
	_types: dict[str, JSType]

	def __init__(self):
		self._types = {}

	def register(self, name:str, typ:JSType) -> Optional[JSType]:
		previous = self._types.pop(name, None)
		self._types[name] = typ
		return previous

	def resolve(self, name:str) -> Optional[JSType]:
		return self._types.get(name)

	def __contains__(self, name:str) -> bool:
		return name in self._types

	def __len__(self) -> int:
		return len(self._types)

	def __iter__(self) -> Iterator[str]:
		return iter(self._types)

	def __repr__(self) -> str:
		return "<TypedefRegistry %s>" % ", ".join(self._types)
