"""The primitive library: host functions registered into a global environment."""

from sable.types.environment import Environment
from sable.builtin import console, datatypes, lists, numeric, strings, system, utility

MODULES = (numeric, lists, strings, datatypes, utility, console, system)


def register(env: Environment) -> None:
    """Register every primitive into the given environment."""
    for module in MODULES:
        module.register(env)
