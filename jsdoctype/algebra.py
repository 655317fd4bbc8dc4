"""
The Algebra of Documented Types
================================

The JSType class hierarchy represents what a documentation comment claims
about some JavaScript value. There are six kinds of claim:

1. Unknown, spelled "*": we cannot see through it.
2. Primitive: a bare name, such as "number" or "RegExp".
3. Alias: a typedef name standing in for some other type.
4. Union: one of several alternatives.
5. Record: a bag of named properties, compared by shape.
6. Function: a result, some positional arguments, and named parameters.

The base class doubles as the invalid (bottom) type. It accepts nothing
and is the supertype of nothing.

Two questions get asked of a type:

	a.is_of_type(b)       -- as a declared type, does "a" accept a value described by "b"?
	a.is_supertype_of(b)  -- is "b" no wider than "a"?

These are not duals. Each kind answers for the kinds it understands,
and otherwise turns the question around and asks the other side. Every
such hand-off lands on a kind that answers outright, so every pairing
ends in a plain boolean.

Unknown is the odd one: it is a supertype of everything,
yet nothing but Unknown is of type Unknown.

---------------------------------------------------------------------------
"""

from typing import Optional, Sequence, Mapping, Iterable

class JSType:
	""" The invalid type, and the defaults for all the others. """

	def is_of_type(self, other:"JSType") -> bool: return False
	def is_supertype_of(self, other:"JSType") -> bool: return False

	def resolve(self) -> "JSType":
		""" See through any aliases. """
		return self

	def is_unknown(self) -> bool: return False

	def property_names(self) -> Sequence[str]: return ()
	def get_property(self, name:str) -> "JSType": return UNKNOWN

	def get_return(self) -> "JSType": return INVALID
	def argument_count(self) -> Optional[int]: return None
	def get_argument(self, index:int) -> "JSType": return INVALID
	def get_parameter(self, name:str) -> "JSType": return UNKNOWN
	def has_parameter(self, name:str) -> bool: return False

	def __str__(self) -> str: return "<invalid>"
	def __repr__(self) -> str: return "<%s %s>" % (type(self).__name__, self)


class UnknownType(JSType):
	def is_of_type(self, other:JSType) -> bool:
		return other.is_unknown()

	def is_supertype_of(self, other:JSType) -> bool:
		return True

	def is_unknown(self) -> bool: return True

	# It might be an object with properties.
	def get_property(self, name:str) -> JSType: return self
	# It might be a function that returns something.
	def get_return(self) -> JSType: return self
	# We can't tell what it may expect.
	def get_argument(self, index:int) -> JSType: return self
	def get_parameter(self, name:str) -> JSType: return self

	def __str__(self) -> str: return "*"


def _strip(name:str) -> str:
	return "".join(name.split())

class PrimitiveType(JSType):
	""" A primitive accepts only itself, compared by name. """
	def __init__(self, name:str):
		self.name = _strip(name)

	def __eq__(self, other):
		return isinstance(other, PrimitiveType) and self.name == other.name

	def __hash__(self): return hash(self.name)

	def __str__(self) -> str: return self.name

	def is_of_type(self, other:JSType) -> bool:
		target = other.resolve()
		if isinstance(target, PrimitiveType):
			return self == target
		if target.is_unknown():
			return False
		return other.is_supertype_of(self)

	def is_supertype_of(self, other:JSType) -> bool:
		target = other.resolve()
		if isinstance(target, PrimitiveType):
			return self == target
		return other.is_of_type(self)


class AliasType(JSType):
	"""
	A typedef name. Everything passes through to the target type,
	except that it renders as the name, so messages mention "Point"
	rather than spelling out every property of a Point.
	"""
	def __init__(self, name:str, type:Optional[JSType]):
		self.name = name
		self.type = type

	def resolve(self) -> JSType:
		seen = set()
		target = self
		while isinstance(target, AliasType):
			if id(target) in seen or target.type is None:
				return INVALID
			seen.add(id(target))
			target = target.type
		return target

	def __str__(self) -> str: return self.name

	def is_of_type(self, other:JSType) -> bool: return self.resolve().is_of_type(other)
	def is_supertype_of(self, other:JSType) -> bool: return self.resolve().is_supertype_of(other)
	def is_unknown(self) -> bool: return self.resolve().is_unknown()
	def property_names(self) -> Sequence[str]: return self.resolve().property_names()
	def get_property(self, name:str) -> JSType: return self.resolve().get_property(name)
	def get_return(self) -> JSType: return self.resolve().get_return()
	def argument_count(self) -> Optional[int]: return self.resolve().argument_count()
	def get_argument(self, index:int) -> JSType: return self.resolve().get_argument(index)
	def get_parameter(self, name:str) -> JSType: return self.resolve().get_parameter(name)
	def has_parameter(self, name:str) -> bool: return self.resolve().has_parameter(name)


class UnionType(JSType):
	"""
	Some alternative covers a narrower type. When the narrower type is itself
	a union, each of its alternatives must be covered separately rather than
	the union as a whole by one alternative. Otherwise a record holding a
	union would not be a supertype of itself.
	"""
	def __init__(self, members:Iterable[JSType]):
		self.members = tuple(members)

	def is_of_type(self, other:JSType) -> bool:
		# Strict on purpose: every alternative must accept it by itself.
		return all(m.is_of_type(other) for m in self.members)

	def is_supertype_of(self, other:JSType) -> bool:
		target = other.resolve()
		if isinstance(target, UnionType):
			return all(self.is_supertype_of(m) for m in target.members)
		return any(m.is_supertype_of(other) for m in self.members)

	def __str__(self) -> str:
		return "|".join(map(str, self.members))


class _Structural(JSType):
	"""
	Records and functions compare by structure, and structure can reach
	back to itself through an alias. A comparison already under way is
	assumed to hold, which is what makes recursive types terminate.

	The bookkeeping is per instance and unsynchronized. Shapes with no
	components skip it, so shared constants like OBJECT are never mutated.
	"""
	def __init__(self):
		self._assumed = set()
		self._rendering = False

	def has_components(self) -> bool:
		raise NotImplementedError(type(self))

	def _compare(self, op:str, target:JSType, how) -> bool:
		if target is self:
			return True
		if not self.has_components():
			return how(target)
		key = op, id(target)
		if key in self._assumed:
			return True
		self._assumed.add(key)
		try: return how(target)
		finally: self._assumed.discard(key)

	def __str__(self) -> str:
		if not self.has_components():
			return self.render()
		if self._rendering:
			return "..."
		self._rendering = True
		try: return self.render()
		finally: self._rendering = False

	def render(self) -> str:
		raise NotImplementedError(type(self))


class RecordType(_Structural):
	""" Properties not mentioned are assumed compatible, not absent. """
	def __init__(self, record:Mapping[str, JSType]):
		super().__init__()
		self.record = dict(record)

	def has_components(self) -> bool: return bool(self.record)

	def property_names(self) -> Sequence[str]:
		return tuple(self.record)

	def get_property(self, name:str) -> JSType:
		return self.record.get(name, UNKNOWN)

	def is_of_type(self, other:JSType) -> bool:
		target = other.resolve()
		if isinstance(target, PrimitiveType) or target.is_unknown():
			return False
		if isinstance(target, RecordType):
			return self._compare("of", target, self._accepts)
		# We don't understand this relationship, so invert it.
		return other.is_supertype_of(self)

	def _accepts(self, target:"RecordType") -> bool:
		for name in target.property_names():
			if not self.get_property(name).is_of_type(target.get_property(name)):
				return False
		return True

	def is_supertype_of(self, other:JSType) -> bool:
		target = other.resolve()
		if isinstance(target, PrimitiveType):
			return False
		if isinstance(target, RecordType):
			return self._compare("super", target, self._covers)
		# We don't understand this relationship, so invert it.
		return other.is_of_type(self)

	def _covers(self, target:"RecordType") -> bool:
		for name in self.property_names():
			if not self.get_property(name).is_supertype_of(target.get_property(name)):
				return False
		return True

	def render(self) -> str:
		return "{%s}" % ", ".join("%s:%s" % (name, typ) for name, typ in self.record.items())


class FunctionType(_Structural):
	def __init__(self, result:JSType, arguments:Sequence[JSType]=(), parameters:Optional[Mapping[str, JSType]]=None):
		super().__init__()
		self.result = result
		self.arguments = tuple(arguments)
		self.parameters = dict(parameters or {})

	def has_components(self) -> bool: return True

	def get_return(self) -> JSType: return self.result

	def argument_count(self) -> Optional[int]: return len(self.arguments)

	# Arguments are positional, for calls.
	def get_argument(self, index:int) -> JSType:
		if 0 <= index < len(self.arguments):
			return self.arguments[index]
		return INVALID

	# Parameters are named, for binding identifiers in the body.
	def get_parameter(self, name:str) -> JSType:
		return self.parameters.get(name, UNKNOWN)

	def has_parameter(self, name:str) -> bool:
		return name in self.parameters

	def is_of_type(self, other:JSType) -> bool:
		target = other.resolve()
		if isinstance(target, (FunctionType, UnionType)):
			return other.is_supertype_of(self)
		return False

	def is_supertype_of(self, other:JSType) -> bool:
		target = other.resolve()
		if isinstance(target, FunctionType):
			return self._compare("super", target, self._covers)
		if isinstance(target, UnionType):
			return other.is_of_type(self)
		return False

	def _covers(self, target:"FunctionType") -> bool:
		if not self.result.is_supertype_of(target.get_return()):
			return False
		# The relationship is upon the external argument interface, hence contravariant.
		for index in range(max(len(self.arguments), len(target.arguments))):
			if not target.get_argument(index).is_supertype_of(self.get_argument(index)):
				return False
		return True

	def render(self) -> str:
		return "function(%s):%s" % (",".join(map(str, self.arguments)), self.result)


UNKNOWN = UnknownType()
INVALID = JSType()
UNDEFINED = PrimitiveType("undefined")
STRING = PrimitiveType("string")
NUMBER = PrimitiveType("number")
BOOLEAN = PrimitiveType("boolean")
NULL = PrimitiveType("null")
REGEXP = PrimitiveType("RegExp")
OBJECT = RecordType({})
