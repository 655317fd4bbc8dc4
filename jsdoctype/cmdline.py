"""
This checks one scanned unit of JavaScript against its documentation comments.

{0}

The unit arrives as JSON, already digested by a doc-comment parser:

    {{
      "annotations": [{{"name": "add", "tags": [...]}}],
      "returns": [{{"function": "add", "type": {{...}}, "site": "add.js:4"}}],
      "calls": [{{"function": "add", "arguments": [{{...}}, null], "site": "main.js:9"}}]
    }}

For example:

    jsdoctype unit.json

prints the type of each named annotation, then complains about any
return or call that disagrees with what was documented.

    jsdoctype -h

will explain all the arguments.
"""
import sys, json, argparse
from pathlib import Path
from .algebra import UNKNOWN
from .checks import Checker
from .diagnostics import Report, TooManyIssues
from .manifest import translate, translate_expression, UnknownTypeSyntax
from .registry import TypedefRegistry
from .syntax import comment_from_doctrine, expression_from_doctrine, expect_mapping, MalformedAnnotation

parser = argparse.ArgumentParser(
	prog="jsdoctype",
	description="Check JavaScript returns and calls against their JSDoc types.",
)
parser.add_argument("unit", help="a JSON file describing one scanned unit of source.")
parser.add_argument('-v', "--verbose", action="count", help="Say more about what is going on.")
parser.add_argument("--ignore-trailing-undefineds", action="store_true", help="Let a call leave off trailing arguments.")
parser.add_argument("--allow-implicit-undefineds", action="store_true", help="Let a bare `return;` through whatever the declared type.")
parser.add_argument("--max-issues", type=int, default=None, help="Give up after this many issues.")

def run(args):
	report = Report(verbose=args.verbose, max_issues=args.max_issues)
	try:
		with open(Path.cwd() / args.unit, "r", encoding="utf-8") as fh:
			unit = json.load(fh)
		Scan(report, args).run(unit)
	except (OSError, ValueError) as ex:
		# MalformedAnnotation and JSON decoding errors are both ValueError.
		print("Could not read %s: %s" % (args.unit, ex), file=sys.stderr)
		return 2
	except TooManyIssues:
		report.complain_to_console()
		print(" *"*35, file=sys.stderr)
		print("Giving up after a few issues. One crisis at a time, eh?", file=sys.stderr)
		return 1
	if report.sick():
		report.complain_to_console()
		return 1
	report.info("Looks plausible to me.")
	return 0

class Scan:
	""" One unit of source: one typedef registry, translated in order. """
	def __init__(self, report, args):
		self._report = report
		self._typedefs = TypedefRegistry()
		self._declared = {}
		self._checker = Checker(
			report,
			ignore_trailing_undefineds=args.ignore_trailing_undefineds,
			allow_implicit_undefineds=args.allow_implicit_undefineds,
		)

	def run(self, unit:dict):
		unit = expect_mapping(unit, "A unit")
		for entry in _entries(unit, "annotations"):
			self.declare(entry)
		for entry in _entries(unit, "returns"):
			self.check_return(entry)
		for entry in _entries(unit, "calls"):
			self.check_call(entry)

	def declare(self, entry:dict):
		name = _name(entry, "name")
		comment = comment_from_doctrine(entry)
		try:
			typ = translate(comment, self._typedefs, self._report)
		except UnknownTypeSyntax as ex:
			self._report.unknown_type_syntax(name or "(anonymous)", ex)
			return
		self._report.info("Translated", name or "(anonymous)", "with", len(comment.tags), "tags")
		if name:
			self._declared[name] = typ
			print("%s: %s" % (name, typ))

	def observe(self, site, data):
		""" The observed type of some expression; None means absent. """
		if data is None:
			return None
		try:
			return translate_expression(expression_from_doctrine(data), self._typedefs)
		except UnknownTypeSyntax as ex:
			self._report.unknown_type_syntax(site, ex)
			return UNKNOWN

	def check_return(self, entry:dict):
		name = _name(entry, "function")
		site = entry.get("site", name)
		declared = self._declared.get(name)
		if declared is not None and declared.argument_count() is not None:
			declared = declared.get_return()
		else:
			declared = None  # Not documented as a function.
		self._checker.check_return(site, declared, self.observe(site, entry.get("type")))

	def check_call(self, entry:dict):
		name = _name(entry, "function")
		site = entry.get("site", name)
		declared = self._declared.get(name, UNKNOWN)
		arguments = [self.observe(site, a) for a in _list(entry, "arguments")]
		self._checker.check_call(site, name, declared, arguments)

def _list(data, key) -> list:
	items = data.get(key, [])
	if not isinstance(items, list):
		raise MalformedAnnotation("The %s should be a list, not %r" % (key, items))
	return items

def _entries(unit, key):
	for entry in _list(unit, key):
		yield expect_mapping(entry, "Each of the %s" % key)

def _name(entry, key):
	name = entry.get(key)
	if name is not None and not isinstance(name, str):
		raise MalformedAnnotation("The %s should be a string, not %r" % (key, name))
	return name

def main():
	if len(sys.argv) > 1:
		exit(run(parser.parse_args()))
	else:
		print(__doc__.strip().format(parser.format_usage()))
