# Core type aliases for the nslisp data model.
# Forms and runtime values are plain Python objects:
#   numbers     -> float (the single numeric type, 1.0/0.0 double as booleans)
#   identifiers -> Symbol
#   lists       -> list
# Function values and loop signals live in nslisp.types.
#
# Naming guidance:
# - SExpression: use in reader/parser code to denote syntactic forms.
# - LispValue:  use in evaluator/runtime code to denote evaluated values.

import logging
from typing import Any, Callable

# Runtime value alias
LispValue = Any
# Parsed form alias
SExpression = LispValue

# Evaluator function type: passed into special forms to avoid import cycles
EvaluatorFn = Callable[..., LispValue]

logging.getLogger(__name__).addHandler(logging.NullHandler())
