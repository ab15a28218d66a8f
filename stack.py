from __future__ import annotations
from typing import List

from errors import CalcError, ErrorCode
from polynomial import Polynomial


class PolyStack:
    """Operand stack; each polynomial on it is owned by the stack."""

    def __init__(self) -> None:
        self._items: List[Polynomial] = []

    def __len__(self) -> int:
        return len(self._items)

    def is_empty(self) -> bool:
        return not self._items

    def require(self, n: int) -> None:
        if len(self._items) < n:
            raise CalcError(ErrorCode.STACK_UNDERFLOW)

    def push(self, p: Polynomial) -> None:
        self._items.append(p)

    def pop(self) -> Polynomial:
        self.require(1)
        return self._items.pop()

    def peek(self, depth: int = 0) -> Polynomial:
        """The element ``depth`` places below the top."""
        self.require(depth + 1)
        return self._items[-1 - depth]

    def pop_many(self, n: int) -> List[Polynomial]:
        """Pop ``n`` elements, returned deepest first."""
        self.require(n)
        if n == 0:
            return []
        taken = self._items[-n:]
        del self._items[-n:]
        return taken

    def clear(self) -> None:
        while self._items:
            self._items.pop().destroy()
