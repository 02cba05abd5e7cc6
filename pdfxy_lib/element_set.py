"""
pdfxy_lib/element_set.py: An ordered set of positioned elements that can be
reordered in place and split into two views without copying.

All views cut from one set share a single backing list (the arena) and only
differ in the (start, end) range they address. A view stays valid as long as
none of its ancestors has been reordered or re-cut since the view was issued.
"""
from .errors import IndexOutOfRangeError, StaleViewError


class ElementSet:
    """A view over the range [start, end) of a shared element arena."""

    def __init__(self, items=None):
        self._arena = list(items or [])
        self._start, self._end = 0, len(self._arena)
        self._parent = None
        self._parent_epoch = 0
        self._epoch = 0

    @classmethod
    def of(cls, items):
        """Creates a new set (with its own arena) holding the given items."""
        if isinstance(items, ElementSet):
            return cls(items.to_list())
        return cls(items)

    @classmethod
    def _view(cls, parent, start, end):
        view = cls.__new__(cls)
        view._arena = parent._arena
        view._start, view._end = start, end
        view._parent, view._parent_epoch = parent, parent._epoch
        view._epoch = 0
        return view

    # --- VALIDITY ---
    def is_valid(self) -> bool:
        """False if an ancestor was mutated after this view was issued."""
        node = self
        while node._parent is not None:
            if node._parent._epoch != node._parent_epoch:
                return False
            node = node._parent
        return True

    def _check(self):
        if not self.is_valid():
            raise StaleViewError(
                "ElementSet view used after its parent set was reordered or re-cut."
            )

    def _touch(self):
        """Invalidates every view previously cut from this set."""
        self._epoch += 1

    # --- READ ACCESS ---
    def __len__(self):
        return self._end - self._start

    def __getitem__(self, index):
        self._check()
        if not 0 <= index < len(self):
            raise IndexOutOfRangeError(f"Index {index} out of range [0, {len(self)}).")
        return self._arena[self._start + index]

    def __iter__(self):
        self._check()
        return iter(self._arena[self._start : self._end])

    def __bool__(self):
        return len(self) > 0

    def is_empty(self) -> bool:
        return len(self) == 0

    def to_list(self) -> list:
        self._check()
        return self._arena[self._start : self._end]

    # --- MUTATION ---
    def swap(self, i, j):
        """Swaps the elements at the indices i and j of this view."""
        self._check()
        n = len(self)
        if not (0 <= i < n and 0 <= j < n):
            raise IndexOutOfRangeError(f"Cannot swap {i} and {j} in a set of size {n}.")
        self._touch()
        a, b = self._start + i, self._start + j
        self._arena[a], self._arena[b] = self._arena[b], self._arena[a]

    def sort(self, key=None):
        """Stable in-place sort of this view's range."""
        self._check()
        self._touch()
        self._arena[self._start : self._end] = sorted(
            self._arena[self._start : self._end], key=key
        )

    def reorder(self, items):
        """Replaces this view's range by a permutation of its own elements."""
        self._check()
        items = list(items)
        current = self._arena[self._start : self._end]
        if sorted(map(id, items)) != sorted(map(id, current)):
            raise ValueError("reorder() requires a permutation of the set's elements.")
        self._touch()
        self._arena[self._start : self._end] = items

    def cut(self, index):
        """Splits this set into the views [0, index) and [index, len).

        Both views alias the backing arena. Cutting again (or reordering this
        set) invalidates the views returned by earlier cuts.
        """
        self._check()
        if not 0 <= index <= len(self):
            raise IndexOutOfRangeError(
                f"Cut index {index} out of range [0, {len(self)}]."
            )
        self._touch()
        split = self._start + index
        return (
            ElementSet._view(self, self._start, split),
            ElementSet._view(self, split, self._end),
        )

    def __repr__(self):
        return f"ElementSet([{self._start}, {self._end}), size={len(self)})"
