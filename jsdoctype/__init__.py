"""
A structural model of the JavaScript types that JSDoc comments declare,
and the checks that compare them with what the code actually does.
"""
