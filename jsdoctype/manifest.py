"""
Doc-comment tags -- parsed by somebody else -- declare what a value is meant to be.
This module maps those declarations into the algebra of documented types.

A comment yields one type. The tags are scanned in order and the first
actionable one decides what sort of comment it is:

* @typedef declares a record under a name. It has no value type of its own.
* @type gives the type outright.
* @param and @return(s) together describe a function.

Record shapes get their members from the sibling tags rather than from
the type expression. JSDoc nests members with dotted names:

	@typedef {object} Box
	@property {object} size
	@property {number} size.width

A @param {object} takes its members from the @property tags too.

A type expression of a kind this module does not understand is a defect in
the input rather than an ordinary unknown, so it raises UnknownTypeSyntax.
"""
from typing import Optional
from boozetools.support.foundation import Visitor
from . import syntax
from .syntax import DocComment, Tag, TypeExpression, EMPTY_COMMENT
from .algebra import JSType, UNKNOWN, UNDEFINED, INVALID, PrimitiveType, AliasType, UnionType, RecordType, FunctionType
from .registry import TypedefRegistry
from .diagnostics import Report

class UnknownTypeSyntax(Exception):
	def __init__(self, expression:TypeExpression):
		super().__init__(expression)
		self.expression = expression
	def __str__(self):
		return "Unknown type expression: %s" % self.expression.kind()

RESULT_TITLES = frozenset(["return", "returns"])
FUNCTION_TITLES = RESULT_TITLES | {"param"}

def translate(comment:DocComment, typedefs:TypedefRegistry, report:Optional[Report]=None) -> JSType:
	for tag in comment.tags:
		if tag.title == "typedef":
			declare_typedef(tag, comment, typedefs, report)
			return UNKNOWN
		if tag.title == "type":
			return Translator(comment, typedefs).translate(tag.type)
		if tag.title in FUNCTION_TITLES:
			return function_from_tags(comment, typedefs)
	return UNKNOWN

def translate_expression(expression:Optional[TypeExpression], typedefs:TypedefRegistry) -> JSType:
	""" For a type expression standing alone, without any sibling tags. """
	return Translator(EMPTY_COMMENT, typedefs).translate(expression)

def declare_typedef(tag:Tag, comment:DocComment, typedefs:TypedefRegistry, report:Optional[Report]):
	if not tag.name:
		return  # Nothing could ever refer to it.
	if _is_record_shape(tag.type):
		typ = Translator(comment, typedefs).members()
	else:
		typ = INVALID
		if report is not None:
			report.typedef_not_a_record(tag.name, tag.type)
	if typedefs.register(tag.name, typ) is not None and report is not None:
		report.typedef_redefined(tag.name)

def _is_record_shape(tx:Optional[TypeExpression]) -> bool:
	if isinstance(tx, syntax.RecordType): return True
	return isinstance(tx, syntax.NameExpression) and tx.name == "object"

def function_from_tags(comment:DocComment, typedefs:TypedefRegistry) -> FunctionType:
	result = UNKNOWN
	arguments, parameters = [], {}
	for tag in comment.tags:
		if tag.title in RESULT_TITLES:
			result = Translator(comment, typedefs).translate(tag.type)
		elif tag.title == "param":
			typ = Translator(comment, typedefs).translate(tag.type)
			arguments.append(typ)
			if tag.name: parameters[tag.name] = typ
	return FunctionType(result, arguments, parameters)

def _member_key(tag:Tag, prefix:str) -> Optional[str]:
	if tag.title != "property" or not tag.name or not tag.name.startswith(prefix):
		return None
	key = tag.name[len(prefix):]
	if key and "." not in key:
		return key

class Translator(Visitor):
	"""
	Carries the whole comment along, because record shapes draw their members
	from its @property tags. The prefix says which of those belong to the
	record under way: names with no dot at the top, then "size." for the
	members of a property called "size", and so forth.
	"""
	def __init__(self, comment:DocComment, typedefs:TypedefRegistry, prefix:str=""):
		self._comment = comment
		self._typedefs = typedefs
		self._prefix = prefix

	def translate(self, tx:Optional[TypeExpression]) -> JSType:
		if tx is None:
			return UNKNOWN
		if not hasattr(self, "visit_"+type(tx).__name__):
			raise UnknownTypeSyntax(tx)
		return self.visit(tx)

	def members(self) -> RecordType:
		record = {}
		for tag in self._comment.tags:
			key = _member_key(tag, self._prefix)
			if key is not None:
				inner = Translator(self._comment, self._typedefs, tag.name+".")
				record[key] = inner.translate(tag.type)
		return RecordType(record)

	def visit_FunctionType(self, ft:syntax.FunctionType):
		return FunctionType(self.translate(ft.result), [self.translate(p) for p in ft.params])

	def visit_RecordType(self, _):
		return self.members()

	def visit_UnionType(self, ut:syntax.UnionType):
		# Alternatives cannot have @property tags of their own.
		alone = Translator(EMPTY_COMMENT, self._typedefs)
		return UnionType([alone.translate(e) for e in ut.elements])

	def visit_NameExpression(self, nx:syntax.NameExpression):
		if nx.name == "object":
			return self.members()
		target = self._typedefs.resolve(nx.name)
		if target is None:
			return PrimitiveType(nx.name)
		return AliasType(nx.name, target)

	@staticmethod
	def visit_UndefinedLiteral(_): return UNDEFINED
