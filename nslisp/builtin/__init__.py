from nslisp.environment import Environment
from nslisp.builtin import env_builtin, native_builtin


def register(environment: Environment) -> None:
    """Register the native.* and builtin namespaces."""
    native_builtin.register(environment)
    env_builtin.register(environment)
