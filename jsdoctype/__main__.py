"""
Lets `python -m jsdoctype unit.json` do what the console script does.
"""
from .cmdline import main

main()
