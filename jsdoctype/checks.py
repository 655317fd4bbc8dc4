"""
The checks that consume the algebra of documented types.

Whoever walks the syntax tree works out the declared and the observed types,
and hands them over along with a "site" to blame. These checks decide whether
the two agree, and tell the report when they do not.

A return is checked by asking the declared type whether it accepts what
was produced: declared.is_of_type(produced). A declared union is strict
about this, so every alternative must accept the produced type.
An argument is asked the other way round: given.is_of_type(expected).

An observed type of Unknown means nobody could tell what the code produces.
The checks let that pass rather than complain about every expression they
cannot see through.
"""
from typing import Any, Optional, Sequence
from .algebra import JSType
from .diagnostics import Report

class Checker:
	def __init__(self, report:Report, *, ignore_trailing_undefineds=False, allow_implicit_undefineds=False):
		self._report = report
		self.ignore_trailing_undefineds = ignore_trailing_undefineds
		self.allow_implicit_undefineds = allow_implicit_undefineds

	def check_return(self, site:Any, declared:Optional[JSType], produced:Optional[JSType]):
		"""
		declared: the declared return type of the enclosing function, if any.
		produced: the type of the returned expression, or None for a bare `return;`
		"""
		if declared is None or declared.is_unknown():
			return  # We can find no expectation for the return type: pass.
		if produced is None:
			if "undefined" not in str(declared) and not self.allow_implicit_undefineds:
				self._report.implicit_undefined_return(site, declared)
			return
		if produced.is_unknown():
			return
		if not declared.is_of_type(produced):
			self._report.bad_return(site, declared, produced)

	def check_argument_count(self, site:Any, function_name:str, declared:JSType, arguments:Sequence[Optional[JSType]]):
		need = declared.argument_count()
		if need is None:
			return  # Not known to be a function.
		if need != len(arguments):
			self._report.wrong_argument_count(site, function_name, need, len(arguments))

	def check_argument_types(self, site:Any, function_name:str, declared:JSType, arguments:Sequence[Optional[JSType]]):
		need = declared.argument_count()
		if not need or not arguments:
			return
		for index in range(need):
			expected = declared.get_argument(index)
			given = arguments[index] if index < len(arguments) else None
			if given is None:
				if not self.ignore_trailing_undefineds:
					self._report.implicit_undefined_argument(site, function_name, index, expected)
			elif given.is_unknown() or expected.is_unknown():
				continue  # Nothing to compare.
			elif not given.is_of_type(expected):
				self._report.bad_argument(site, function_name, index, expected, given)

	def check_call(self, site:Any, function_name:str, declared:JSType, arguments:Sequence[Optional[JSType]]):
		self.check_argument_count(site, function_name, declared, arguments)
		self.check_argument_types(site, function_name, declared, arguments)
