"""Scope chain for the Monkey evaluator."""


class Environment:
    """Maps names to Objects, falling back to an enclosing Environment (outer) for names it does not bind itself.

    A new Environment is created once per session and once per function call; nothing else introduces a scope. Function
    objects keep a reference to the Environment they were defined in, so an Environment lives as long as any closure
    created in it.
    """

    def __init__(self, outer=None):
        self.store = {}
        self.outer = outer

    @classmethod
    def new_enclosed(cls, outer):
        """Returns a fresh, empty scope chained to outer."""
        return cls(outer)

    def get(self, name):
        """Looks name up in this scope and then in every enclosing one. Returns None if name is not bound anywhere."""
        env = self
        while env is not None:
            if name in env.store:
                return env.store[name]
            env = env.outer
        return None

    def set(self, name, value):
        """Binds name in this (the innermost) scope, shadowing any outer binding. Returns value."""
        self.store[name] = value
        return value

    def __repr__(self):
        return f"Environment({sorted(self.store)}, outer={self.outer!r})"
