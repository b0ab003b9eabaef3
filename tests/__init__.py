"""
Only the root tests directory has an __init__.py.

It makes `tests` a package, so shared helpers import as `tests.helpers...` from any test module.
Subdirectories work as namespace packages (PEP 420) and need no __init__.py of their own.
"""
