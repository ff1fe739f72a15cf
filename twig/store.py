"""
Per-run value store.

One Values instance is created for each invoke() and threaded by reference
through every command of the descent, so a flag consumed at any depth is
visible to the leaf. Each flag identity maps to the ordered list of values
found on the command line; appends never overwrite.
"""


class Values:
    """
    Mapping of flag identity to recorded values, in command-line order.
    """

    __slots__ = ("_values",)

    def __init__(self):
        self._values = {}

    def append(self, identity, value, /):
        self._values.setdefault(identity, []).append(value)

    def get(self, identity, /):
        """
        A copy of the values recorded for identity (empty when none were).
        """
        return list(self._values.get(identity, ()))

    def count(self, identity, /):
        return len(self._values.get(identity, ()))

    def __getitem__(self, identity):
        return self.get(identity)

    def __contains__(self, identity):
        return identity in self._values

    def __len__(self):
        return len(self._values)

    def __repr__(self):
        return "values(%r)" % self._values


__all__ = (
    "Values",
)
