import sys, random
from typing import Any, Sequence

class TooManyIssues(Exception):
	pass

def _outburst():
	particle = ["Oh, ", "Well, ", "Aw, ", "", ""]

	minced_oaths = [
		'Ack', 'ARGH', 'Blargh', 'Confound it', 'Crud', 'Curses', "Crikey",
		'Drat', 'Fiddlesticks', 'Good Grief', "Great Scott",
		'Heavens', 'Jeepers', 'Nuts', 'Rats',
	]

	resignations = [
		'The types do not line up.',
		'The comments and the code disagree.',
		'Somebody documented one thing and did another.',
		'I have no idea what the right answer is.',
	]

	return "%s%s! %s"%tuple(map(random.choice, (particle, minced_oaths, resignations)))

class Report:
	"""
	Collects the issues that checks and translation turn up.
	The "site" on each issue is whatever the caller uses to point at code:
	an AST node, a "file:line" string, anything with a sensible str().
	"""
	_issues : list["Pic"]

	def __init__(self, *, verbose:int=0, max_issues=None):
		self._verbose = verbose or 0   # Because None is incomparable.
		self._issues = []
		self._redefined = set()
		self._max_issues = max_issues

	@property
	def issues(self) -> Sequence["Pic"]: return tuple(self._issues)

	def ok(self): return not self._issues
	def sick(self): return bool(self._issues)

	def issue(self, it:"Pic"):
		self._issues.append(it)
		if self._max_issues is not None and len(self._issues) >= self._max_issues:
			raise TooManyIssues(self)

	def reset(self):
		self._issues.clear()
		self._redefined.clear()

	def info(self, *args):
		if self._verbose:
			print(*args, file=sys.stderr)

	def complain_to_console(self):
		""" Emit all the issues to the console. """
		_bemoan(self._issues)

	def assert_no_issues(self, message):
		""" Does what it says on the tin """
		if self._issues:
			self.complain_to_console()
			raise AssertionError(_outburst()+" "+message)

	# Methods the manifest translator calls:
	def typedef_redefined(self, name:str):
		if name not in self._redefined:
			self._redefined.add(name)
			intro = "The typedef '%s' is defined more than once. The latest definition wins." % name
			self.issue(Pic("typedef", intro, []))

	def typedef_not_a_record(self, name:str, shape):
		intro = "The typedef '%s' should describe an object, but it describes %r instead." % (name, shape)
		footer = ["Mentions of '%s' will accept nothing." % name]
		self.issue(Pic("typedef", intro, [], footer))

	def unknown_type_syntax(self, site:Any, problem):
		intro = "This annotation uses a kind of type expression I was never taught to read."
		self.issue(Pic("translate", intro, [Annotation(site, str(problem))]))

	# Methods the checks call:
	def implicit_undefined_return(self, site:Any, need):
		intro = "returning an implicit undefined from a function declared to return %s" % need
		self.issue(Pic("return-type", intro, [Annotation(site)]))

	def bad_return(self, site:Any, need, got):
		intro = "returning %s from a function declared to return %s" % (got, need)
		self.issue(Pic("return-type", intro, [Annotation(site)]))

	def wrong_argument_count(self, site:Any, function_name:str, need:int, got:int):
		if need:
			intro = "function %s expects %d arguments but was called with %d" % (function_name, need, got)
		else:
			intro = "function %s expects no arguments but was called with %d" % (function_name, got)
		self.issue(Pic("argument-count", intro, [Annotation(site)]))

	def implicit_undefined_argument(self, site:Any, function_name:str, index:int, need):
		pattern = "type %s expected for parameter %d in call to %s but undefined implicitly provided"
		intro = pattern % (need, index, function_name)
		self.issue(Pic("argument-type", intro, [Annotation(site)]))

	def bad_argument(self, site:Any, function_name:str, index:int, need, got):
		pattern = "type %s expected for parameter %d in call to %s but %s provided"
		intro = pattern % (need, index, function_name, got)
		self.issue(Pic("argument-type", intro, [Annotation(site)]))

class Annotation:
	def __init__(self, site:Any, caption:str=""):
		self.site, self.caption = site, caption
	def illustrate(self) -> str:
		where = "  at %s" % (self.site,)
		return where + (": " + self.caption if self.caption else "")

class Pic:
	def __init__(self, phase:str, intro:str, anns:list[Annotation], footer=()):
		self.phase = phase
		self.intro, self._anns, self._footer = intro, anns, footer
	@property
	def sites(self) -> tuple: return tuple(ann.site for ann in self._anns)
	def as_text(self):
		lines = ["[%s] %s" % (self.phase, self.intro)]
		lines.extend(ann.illustrate() for ann in self._anns)
		lines.extend(self._footer)
		return '\n'.join(lines)
	def __str__(self): return self.intro

def _bemoan(issues):
	""" Emit all the issues to the console. """
	if issues:
		print("*"*60, file=sys.stderr)
		print(_outburst(), file=sys.stderr)
	for i in issues:
		print("  -"*20, file=sys.stderr)
		print(i.as_text(), file=sys.stderr)
	sys.stderr.flush()
