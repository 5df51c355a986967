from nslisp.types.symbol import Symbol
from nslisp.types.context import Context, Namespace, Scope
from nslisp.types.functions import (
    NativeFunction,
    Function,
    UserFunction,
    AnonymousFunction,
    RecursionFunction,
)
from nslisp.types.loop_signal import LoopSignal, Stop, Continue
