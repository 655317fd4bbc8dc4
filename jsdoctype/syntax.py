"""
The annotation-side syntax: what a documentation-comment parser hands over.

A doc-comment arrives as an ordered list of tags. Each tag carries a title,
maybe a name, and maybe a declared-type expression. The expression classes
take their names from the discriminators the doctrine parser uses,
so the manifest translator can dispatch on class name.

The doctrine parser itself speaks JSON-shaped dictionaries.
The *_from_doctrine functions turn those into the classes here.
"""
from typing import Any, Mapping, Optional, Sequence

class MalformedAnnotation(ValueError):
	""" The input is not shaped like parsed doctrine output at all. """

class TypeExpression:
	def kind(self) -> str: return type(self).__name__

class NameExpression(TypeExpression):
	def __init__(self, name:str):
		if not isinstance(name, str):
			raise MalformedAnnotation("A name expression needs a name, not %r" % (name,))
		self.name = name
	def __repr__(self): return "<name:%s>" % self.name

class UnionType(TypeExpression):
	def __init__(self, elements:Sequence[TypeExpression]):
		self.elements = tuple(elements)
	def __repr__(self): return "<union:%s>" % "|".join(map(repr, self.elements))

class FieldType(TypeExpression):
	def __init__(self, key:str, value:Optional[TypeExpression]):
		self.key, self.value = key, value
	def __repr__(self): return "<field:%s>" % self.key

class RecordType(TypeExpression):
	# The fields come along for the ride, but member types
	# get sourced from the sibling @property tags.
	def __init__(self, fields:Sequence[FieldType]=()):
		self.fields = tuple(fields)
	def __repr__(self): return "<record:%s>" % ",".join(f.key for f in self.fields)

class FunctionType(TypeExpression):
	def __init__(self, params:Sequence[TypeExpression], result:Optional[TypeExpression]=None):
		self.params = tuple(params)
		self.result = result
	def __repr__(self): return "<function/%d>" % len(self.params)

class UndefinedLiteral(TypeExpression):
	def __repr__(self): return "<undefined>"

class ForeignExpression(TypeExpression):
	""" Anything doctrine can say that this package was never meant to interpret. """
	def __init__(self, kind:Optional[str], raw:Mapping):
		self._kind, self.raw = kind, raw
	def kind(self) -> str: return str(self._kind)
	def __repr__(self): return "<foreign:%s>" % self._kind


class Tag:
	def __init__(self, title:str, name:Optional[str]=None, type:Optional[TypeExpression]=None, description:Optional[str]=None):
		self.title = title
		self.name = name
		self.type = type
		self.description = description
	def __repr__(self):
		return "<@%s %s %s>" % (self.title, self.type, self.name or "")

class DocComment:
	def __init__(self, tags:Sequence[Tag], description:str=""):
		self.tags = tuple(tags)
		self.description = description
	def __repr__(self): return "<DocComment %s>" % (self.tags,)

EMPTY_COMMENT = DocComment(())

#######################################################################

def expect_mapping(data:Any, what:str) -> Mapping:
	if not isinstance(data, Mapping):
		raise MalformedAnnotation("%s should be a mapping, not %r" % (what, data))
	return data

def _items(data:Mapping, key:str) -> Sequence:
	items = data.get(key, ())
	if not isinstance(items, (list, tuple)):
		raise MalformedAnnotation("The %s should be a list, not %r" % (key, items))
	return items

def _optional_expression(data:Any) -> Optional[TypeExpression]:
	return None if data is None else expression_from_doctrine(data)

def expression_from_doctrine(data:Any) -> TypeExpression:
	data = expect_mapping(data, "A type expression")
	kind = data.get("type")
	if kind == "NameExpression":
		return NameExpression(data.get("name"))
	if kind == "UnionType":
		return UnionType([expression_from_doctrine(e) for e in _items(data, "elements")])
	if kind == "RecordType":
		return RecordType([_field_from_doctrine(f) for f in _items(data, "fields")])
	if kind == "FunctionType":
		return FunctionType(
			[expression_from_doctrine(p) for p in _items(data, "params")],
			_optional_expression(data.get("result")),
		)
	if kind == "UndefinedLiteral":
		return UndefinedLiteral()
	return ForeignExpression(kind, data)

def _field_from_doctrine(data:Any) -> FieldType:
	data = expect_mapping(data, "A record field")
	return FieldType(data.get("key"), _optional_expression(data.get("value")))

def tag_from_doctrine(data:Any) -> Tag:
	data = expect_mapping(data, "A tag")
	if not data.get("title") or not isinstance(data["title"], str):
		raise MalformedAnnotation("A tag needs a title: %r" % (data,))
	if not isinstance(data.get("name"), (str, type(None))):
		raise MalformedAnnotation("A tag name should be a string: %r" % (data,))
	return Tag(
		data["title"],
		name=data.get("name"),
		type=_optional_expression(data.get("type")),
		description=data.get("description"),
	)

def comment_from_doctrine(data:Any) -> DocComment:
	data = expect_mapping(data, "A doc-comment")
	return DocComment([tag_from_doctrine(t) for t in _items(data, "tags")], data.get("description") or "")
