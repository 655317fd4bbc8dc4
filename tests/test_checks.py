import unittest
from unittest import mock

from jsdoctype.diagnostics import Report, TooManyIssues
from jsdoctype.checks import Checker
from jsdoctype.algebra import (
	UNKNOWN, UNDEFINED, NUMBER, STRING, BOOLEAN, NULL,
	UnionType, RecordType, FunctionType,
)

class Silence(Report):
	def __init__(self, max_issues=30):
		super().__init__(verbose=False, max_issues=max_issues)
		self.complain_to_console = mock.Mock()

ADD = FunctionType(NUMBER, [NUMBER, NUMBER], {"a":NUMBER, "b":NUMBER})
NOW = FunctionType(NUMBER)
DRAW = FunctionType(UNDEFINED, [RecordType({"x":NUMBER, "y":NUMBER})])

class CheckTestCase(unittest.TestCase):
	def setUp(self):
		self.report = Silence()
		self.checker = Checker(self.report)

	def assertComplaints(self, *intros):
		self.assertEqual(list(intros), [str(pic) for pic in self.report.issues])

	def assertQuiet(self):
		self.assertComplaints()


class ReturnTests(CheckTestCase):

	def test_matching_return(self):
		self.checker.check_return("f.js:1", NUMBER, NUMBER)
		self.checker.check_return("f.js:2", NUMBER, UnionType([NUMBER, NULL]))
		self.checker.check_return("f.js:3", UnionType([NUMBER, NULL]), UnionType([NUMBER, NULL]))
		self.checker.check_return("f.js:4", RecordType({"x":NUMBER, "y":NUMBER}), RecordType({"x":NUMBER}))
		self.assertQuiet()

	def test_wrong_return(self):
		self.checker.check_return("f.js:1", NUMBER, STRING)
		self.assertComplaints("returning string from a function declared to return number")
		self.assertEqual("return-type", self.report.issues[0].phase)
		self.assertEqual(("f.js:1",), self.report.issues[0].sites)

	def test_declared_union_is_strict(self):
		# Every alternative must accept what was returned.
		self.checker.check_return("f.js:1", UnionType([NUMBER, NULL]), NUMBER)
		self.assertComplaints("returning number from a function declared to return number|null")

	def test_declared_record_judges_the_returned_properties(self):
		self.checker.check_return("f.js:1", RecordType({"x":NUMBER}), RecordType({"x":NUMBER, "y":STRING}))
		self.assertComplaints("returning {x:number, y:string} from a function declared to return {x:number}")

	def test_nothing_declared(self):
		self.checker.check_return("f.js:1", None, STRING)
		self.checker.check_return("f.js:2", UNKNOWN, STRING)
		self.checker.check_return("f.js:3", None, None)
		self.assertQuiet()

	def test_unknown_produced(self):
		self.checker.check_return("f.js:1", NUMBER, UNKNOWN)
		self.assertQuiet()

	def test_bare_return(self):
		self.checker.check_return("f.js:1", NUMBER, None)
		self.assertComplaints("returning an implicit undefined from a function declared to return number")

	def test_bare_return_where_undefined_is_declared(self):
		self.checker.check_return("f.js:1", UNDEFINED, None)
		self.checker.check_return("f.js:2", UnionType([STRING, UNDEFINED]), None)
		self.assertQuiet()

	def test_bare_return_allowed(self):
		checker = Checker(self.report, allow_implicit_undefineds=True)
		checker.check_return("f.js:1", NUMBER, None)
		self.assertQuiet()
		checker.check_return("f.js:2", NUMBER, BOOLEAN)
		self.assertComplaints("returning boolean from a function declared to return number")


class CallTests(CheckTestCase):

	def test_good_call(self):
		self.checker.check_call("m.js:1", "add", ADD, [NUMBER, NUMBER])
		self.checker.check_call("m.js:2", "now", NOW, [])
		self.checker.check_call("m.js:3", "draw", DRAW, [RecordType({"x":NUMBER, "y":NUMBER, "z":NUMBER})])
		self.assertQuiet()

	def test_too_many(self):
		self.checker.check_argument_count("m.js:1", "add", ADD, [NUMBER, NUMBER, NUMBER])
		self.checker.check_argument_count("m.js:2", "now", NOW, [NUMBER])
		self.assertComplaints(
			"function add expects 2 arguments but was called with 3",
			"function now expects no arguments but was called with 1",
		)
		self.assertEqual("argument-count", self.report.issues[0].phase)

	def test_too_few(self):
		self.checker.check_call("m.js:1", "add", ADD, [NUMBER])
		self.assertComplaints(
			"function add expects 2 arguments but was called with 1",
			"type number expected for parameter 1 in call to add but undefined implicitly provided",
		)

	def test_too_few_but_trailing_undefineds_ignored(self):
		checker = Checker(self.report, ignore_trailing_undefineds=True)
		checker.check_argument_types("m.js:1", "add", ADD, [NUMBER])
		self.assertQuiet()
		checker.check_call("m.js:2", "add", ADD, [NUMBER])
		self.assertComplaints("function add expects 2 arguments but was called with 1")

	def test_no_arguments_at_all(self):
		self.checker.check_call("m.js:1", "add", ADD, [])
		self.assertComplaints("function add expects 2 arguments but was called with 0")

	def test_explicit_hole(self):
		self.checker.check_argument_types("m.js:1", "add", ADD, [None, NUMBER])
		self.assertComplaints("type number expected for parameter 0 in call to add but undefined implicitly provided")

	def test_wrong_type(self):
		self.checker.check_call("m.js:1", "add", ADD, [NUMBER, STRING])
		self.assertComplaints("type number expected for parameter 1 in call to add but string provided")
		self.assertEqual("argument-type", self.report.issues[0].phase)

	def test_record_argument_lacking_depth(self):
		self.checker.check_call("m.js:1", "draw", DRAW, [RecordType({"x":NUMBER, "y":STRING})])
		self.assertComplaints("type {x:number, y:number} expected for parameter 0 in call to draw but {x:number, y:string} provided")

	def test_unknown_argument_passes(self):
		self.checker.check_call("m.js:1", "add", ADD, [UNKNOWN, NUMBER])
		self.assertQuiet()

	def test_unknown_argument_slot_takes_anything(self):
		loose = FunctionType(UNKNOWN, [UNKNOWN])
		self.checker.check_call("m.js:1", "log", loose, [STRING])
		self.checker.check_call("m.js:2", "log", loose, [RecordType({"x":NUMBER})])
		self.assertQuiet()

	def test_not_a_function(self):
		for declared in [UNKNOWN, NUMBER, RecordType({"x":NUMBER})]:
			self.checker.check_call("m.js:1", "thing", declared, [NUMBER, STRING])
		self.assertQuiet()

	def test_extra_arguments_are_not_type_checked(self):
		self.checker.check_argument_types("m.js:1", "add", ADD, [NUMBER, NUMBER, STRING])
		self.assertQuiet()


class ReportTests(unittest.TestCase):

	def test_gives_up(self):
		report = Silence(max_issues=2)
		checker = Checker(report)
		checker.check_return("a", NUMBER, STRING)
		with self.assertRaises(TooManyIssues):
			checker.check_return("b", NUMBER, STRING)
		self.assertEqual(2, len(report.issues))

	def test_assert_no_issues(self):
		report = Silence()
		report.assert_no_issues("never raised")
		Checker(report).check_return("a", NUMBER, STRING)
		with self.assertRaises(AssertionError):
			report.assert_no_issues("should complain")
		self.assertEqual(1, report.complain_to_console.call_count)

	def test_reset(self):
		report = Silence()
		Checker(report).check_return("a", NUMBER, STRING)
		self.assertTrue(report.sick())
		report.reset()
		self.assertTrue(report.ok())

	def test_as_text_names_the_site(self):
		report = Silence()
		Checker(report).check_return("lib/f.js:12", NUMBER, STRING)
		text = report.issues[0].as_text()
		self.assertIn("[return-type]", text)
		self.assertIn("lib/f.js:12", text)


if __name__ == '__main__':
	unittest.main()
