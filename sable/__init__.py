# Core type aliases for Sable's data model.
# Atoms are plain Python values (float, str, bool) plus the Symbol, Nil and Void
# singletons from sable.types; lists are chains of mutable Pair cells.
#
# Naming guidance:
# - SExpression: Use in reader/special-form code to denote syntactic forms (code-as-data).
# - LispValue:  Use in evaluator/runtime code to denote evaluated values.

from typing import Any, Callable

__version__ = "0.3.0"

# Runtime value alias
LispValue = Any
# Forms and values share one representation
SExpression = LispValue

# Evaluator function type passed into special forms and procedures
EvaluatorFn = Callable[..., LispValue]
