# core/stack.py
from typing import List
import numpy as np

class MatrixStack:
    """
    A stack of 4x4 matrices. The top holds the accumulated transform of the
    node currently being visited.
    """
    def __init__(self, initial: np.ndarray = None):
        self._items: List[np.ndarray] = []
        if initial is not None:
            self.push(initial)

    def push(self, matrix: np.ndarray):
        self._items.append(np.array(matrix, dtype=np.float64))

    def pop(self) -> np.ndarray:
        if not self._items:
            raise IndexError("Stack is empty. Nothing to pop")
        return self._items.pop()

    def peek(self) -> np.ndarray:
        if not self._items:
            raise IndexError("Stack is empty. Nothing to peek")
        return self._items[-1]

    def is_empty(self) -> bool:
        return not self._items

    def copy(self) -> "MatrixStack":
        """
        Returns an independent stack with the same contents, one per render worker.
        """
        result = MatrixStack()
        result._items = [m.copy() for m in self._items]
        return result

    def __len__(self) -> int:
        return len(self._items)
