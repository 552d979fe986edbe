"""Lexical scopes for the Monkey evaluator."""


class Environment:
    """Mapping from names to Objects, chained to an optional outer Environment.

    A child holds a reference to its parent and never copies the parent's bindings, so a closure that keeps its
    defining Environment alive also sees later changes to it. Parents are always created before their children, so
    the chain cannot form a cycle.
    """

    def __init__(self, outer=None):
        self.store = {}
        self.outer = outer

    @classmethod
    def enclosed(cls, outer):
        """Returns a new, empty Environment whose lookups fall back to outer."""
        return cls(outer)

    def get(self, name):
        """Looks name up, innermost scope first. Returns (obj, found)."""
        env = self
        while env is not None:
            if name in env.store:
                return env.store[name], True
            env = env.outer
        return None, False

    def set(self, name, obj):
        """Binds name in this scope (rebinding is allowed) and returns obj."""
        self.store[name] = obj
        return obj

    def __contains__(self, name):
        return self.get(name)[1]

    def __repr__(self):
        return f"Environment({sorted(self.store)}, outer={self.outer!r})"
