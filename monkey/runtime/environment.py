"""Lexical scopes for the evaluator."""


class Environment:
    """Mutable mapping of names to objects, chained to an optional enclosing (outer) Environment. The chain is rooted at
    the global scope of a session.

    Environments are shared by reference: a Function keeps the Environment it was defined in, so several closures and
    call frames may hold the same scope and see each other's bindings immediately.
    """

    def __init__(self, outer=None):
        self.store = {}
        self.outer = outer

    @classmethod
    def enclosed(cls, outer):
        """Returns a new, empty scope whose lookups fall back to outer."""
        return cls(outer)

    def get(self, name):
        """Returns the object bound to name in the nearest scope that binds it, or None if no scope does."""
        env = self
        while env is not None:
            if name in env.store:
                return env.store[name]
            env = env.outer
        return None

    def set(self, name, value):
        """Binds name in this scope, shadowing any binding in an enclosing scope. Returns value."""
        self.store[name] = value
        return value

    def __contains__(self, name):
        return self.get(name) is not None

    def __repr__(self):
        depth = 0
        env = self.outer
        while env is not None:
            depth += 1
            env = env.outer
        return f"Environment(names={sorted(self.store)}, depth={depth})"
