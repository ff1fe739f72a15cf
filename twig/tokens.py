"""
Token stack shared down the command tree during one run.

Tokens are stored reversed so that "next to process" is always the cheap end of
the list. The stack is handed from parent to child by reference and is never
copied, which keeps every token consumed exactly once across the whole descent.
"""


class TokenStack:
    """
    Reversed, pop-from-end sequence of raw command-line tokens.

    Order as seen through peek()/pop() is exactly the order of the iterable the
    stack was built from. peek() and pop() raise IndexError on an empty stack.
    """

    __slots__ = ("_items",)

    def __init__(self, tokens=(), /):
        items = list(tokens)
        for token in items:
            if not isinstance(token, str):
                raise TypeError("token stack items must be strings")
        items.reverse()
        self._items = items

    def peek(self):
        try:
            return self._items[-1]
        except IndexError:
            raise IndexError("peek from empty token stack") from None

    def pop(self):
        try:
            return self._items.pop()
        except IndexError:
            raise IndexError("pop from empty token stack") from None

    def push(self, token, /):
        """
        Put a token back so that it is the next one returned by peek()/pop().
        """
        if not isinstance(token, str):
            raise TypeError("token stack items must be strings")
        self._items.append(token)

    def pop_flag(self):
        """
        Pop a flag token, splitting "--name=value" / "-n=value" in two.

        The value half is pushed back ahead of the remaining tokens and the name
        half is returned. Only tokens with a leading dash are split, so a quoted
        'a=b' argument passes through whole; quotes inside the value are kept.
        """
        token = self.pop()
        if token.startswith("-") and "=" in token:
            token, value = token.split("=", 1)
            self.push(value)
        return token

    def empty(self):
        return not self._items

    def size(self):
        return len(self._items)

    def remaining(self):
        """
        Snapshot of the unconsumed tokens in command-line order.
        """
        return list(reversed(self._items))

    def __len__(self):
        return len(self._items)

    def __bool__(self):
        return bool(self._items)

    def __repr__(self):
        return "token-stack(%r)" % self.remaining()


__all__ = (
    "TokenStack",
)
