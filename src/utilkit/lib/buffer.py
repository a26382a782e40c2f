"""
Bounds-checked, fixed-size, multi-dimensional buffers.

`BoundedBuffer` stores its elements in a single flat list laid out in
row-major order, along with the strides needed to turn a coordinate into a
flat offset. Indexing one level at a time returns a `BufferView` that borrows
the same storage, until the last dimension, where it returns the element
itself. The buffer never grows or shrinks after construction.

Out-of-range indexes follow the configured `BoundsPolicy` (see
`utilkit.lib.errors`).
"""

import math
from collections.abc import Callable, Iterable, Iterator
from typing import Any

from utilkit.lib.errors import (
    BoundsPolicy,
    ContractError,
    as_index,
    check_index,
    resolve_policy,
)


class _BufferBase:
    """Shared indexing logic for owned buffers and the views they hand out."""

    def __init__(
        self,
        storage: list,
        start: int,
        shape: tuple[int, ...],
        strides: tuple[int, ...],
        dtype: Callable[[], Any],
        policy: BoundsPolicy,
    ):
        self._storage = storage
        self._start = start
        self._shape = shape
        self._strides = strides
        self._dtype = dtype
        self._policy = policy

    @property
    def shape(self) -> tuple[int, ...]:
        return self._shape

    @property
    def ndim(self) -> int:
        return len(self._shape)

    @property
    def size(self) -> int:
        return self._strides[0] * self._shape[0]

    @property
    def strides(self) -> tuple[int, ...]:
        return self._strides

    @property
    def dtype(self) -> Callable[[], Any]:
        return self._dtype

    @property
    def policy(self) -> BoundsPolicy:
        return self._policy

    def _where(self, op: str) -> str:
        return f"{type(self).__name__}.{op}"

    def _require_1d(self, op: str) -> None:
        if self.ndim != 1:
            raise TypeError(f"{op}() is only defined for one-dimensional buffers, this one has {self.ndim}.")

    def _locate(self, index: object, op: str) -> int:
        """Validate an index along the first dimension, clamping it under LEGACY."""

        index = as_index(index)
        limit = self._shape[0]

        if not check_index(index, limit, self._policy, self._where(op)):
            index = 0 if index < 0 else limit - 1

        return index

    def _view(self, index: int) -> "BufferView":
        return BufferView(
            self._storage,
            self._start + index * self._strides[0],
            self._shape[1:],
            self._strides[1:],
            self._dtype,
            self._policy,
        )

    def _descend(self, key: tuple) -> tuple["_BufferBase", object]:
        """Walk all but the last index of a tuple key, returning the node and the last index."""

        if not key:
            raise ContractError("At least one index is required.")
        if len(key) > self.ndim:
            raise ContractError(f"Too many indexes ({len(key)}) for a {self.ndim}-dimensional buffer.")

        node = self
        for index in key[:-1]:
            node = node._view(node._locate(index, "index"))

        return node, key[-1]

    def __getitem__(self, key):
        if isinstance(key, tuple):
            node, key = self._descend(key)
            return node[key]

        index = self._locate(key, "index")
        if self.ndim == 1:
            return self._storage[self._start + index]

        return self._view(index)

    def __setitem__(self, key, value) -> None:
        if isinstance(key, tuple):
            node, key = self._descend(key)
            node[key] = value
            return

        if self.ndim != 1:
            raise TypeError("Cannot assign to a sub-buffer; index down to an element first.")

        self._storage[self._start + self._locate(key, "index")] = value

    def __len__(self) -> int:
        return self._shape[0]

    def __iter__(self) -> Iterator:
        for i in range(self._shape[0]):
            yield self[i]

    def at(self, index: int) -> Any:
        """
        Return the element at `index`. Equivalent to `buf[index]`.

        Raises:
            TypeError: If the buffer has more than one dimension.
            OutOfRangeError: If `index` is out of range under the STRICT policy.
        """

        self._require_1d("at")
        return self._storage[self._start + self._locate(index, "at")]

    def first(self) -> Any:
        """Return the first element of a one-dimensional buffer."""

        self._require_1d("first")
        return self._storage[self._start]

    def data(self) -> "BufferPointer":
        """Return a pointer to the first element of the flat storage behind this buffer."""

        return BufferPointer(self._storage, self._start, self._start + self.size, self._start, self._policy)

    def offset(self, n: int) -> "BufferPointer":
        """
        Return a pointer `n` elements past the start of a one-dimensional buffer.

        Raises:
            TypeError: If the buffer has more than one dimension.
            OutOfRangeError: If `n` is out of range under the STRICT policy.
        """

        self._require_1d("offset")
        n = self._locate(n, "offset")
        return BufferPointer(self._storage, self._start, self._start + self.size, self._start + n, self._policy)

    def __add__(self, n: int) -> "BufferPointer":
        return self.offset(n)

    def zero(self) -> None:
        """
        Overwrite every element with zero.

        Raises:
            TypeError: If the element type is not numeric.
        """

        dtype = self._dtype
        if not (isinstance(dtype, type) and issubclass(dtype, (int, float, complex))):
            raise TypeError(f"Cannot zero a buffer of {getattr(dtype, '__name__', dtype)!r} elements.")

        self._storage[self._start : self._start + self.size] = [dtype(0)] * self.size

    def fill(self, value: Any) -> None:
        """Assign `value` to every element."""

        self._storage[self._start : self._start + self.size] = [value] * self.size

    def tolist(self) -> list:
        """Return the contents as nested lists."""

        if self.ndim == 1:
            return self._storage[self._start : self._start + self.size]

        return [self._view(i).tolist() for i in range(self._shape[0])]

    def __repr__(self) -> str:
        name = getattr(self._dtype, "__name__", repr(self._dtype))
        return f"{type(self).__name__}(shape={self._shape}, dtype={name})"


class BoundedBuffer(_BufferBase):
    """
    A fixed-size array of one or more dimensions with checked indexing.

    Example:
        buf = BoundedBuffer(2, 3)
        buf[0][1] = 7
        buf[1, 2]     # 0
        buf[2]        # OutOfRangeError under the STRICT policy
    """

    def __init__(
        self,
        *dims: int,
        dtype: Callable[[], Any] = int,
        policy: BoundsPolicy | str | None = None,
    ):
        """
        Allocate a buffer with every element set to `dtype()`.

        Args:
            *dims (int): Size of each dimension, outermost first. Each must be > 0.
            dtype (Callable, optional): Element type or factory. Defaults to int.
            policy (BoundsPolicy | str, optional): Out-of-range policy. Defaults to
                the `[bounds] policy` setting.

        Raises:
            ContractError: If no dimensions are given or any of them is not positive.
        """

        if not dims:
            raise ContractError("At least one dimension is required.")

        shape = tuple(as_index(d, "Dimension") for d in dims)
        if any(d <= 0 for d in shape):
            raise ContractError("Dimensions must be greater than zero.")

        strides = []
        step = 1
        for d in reversed(shape):
            strides.append(step)
            step *= d

        storage = [dtype() for _ in range(math.prod(shape))]
        super().__init__(storage, 0, shape, tuple(reversed(strides)), dtype, resolve_policy(policy))


class BufferView(_BufferBase):
    """
    A lower-dimensional window onto a `BoundedBuffer`.

    Views share storage with the buffer they came from; writes through a view
    are visible in the buffer.
    """

    pass


class BufferPointer:
    """
    A checked cursor into the flat storage of a buffer.

    The pointer may range over the elements of the buffer or view it came
    from and nothing else.

    Iterating a pointer yields the elements from its position to the end of
    that buffer. Pointers compare equal when they share storage and position,
    and are not hashable.
    """

    def __init__(self, storage: list, base: int, end: int, position: int, policy: BoundsPolicy):
        self._storage = storage
        self._base = base
        self._end = end
        self._pos = position
        self._policy = policy

    @property
    def index(self) -> int:
        """Position relative to the start of the owning buffer."""

        return self._pos - self._base

    @property
    def length(self) -> int:
        """Number of elements in the owning buffer."""

        return self._end - self._base

    @property
    def value(self) -> Any:
        return self._storage[self._pos]

    @value.setter
    def value(self, value: Any) -> None:
        self._storage[self._pos] = value

    def _resolve(self, k: object, op: str) -> int:
        """Return the absolute position `k` elements away, clamped under LEGACY."""

        target = self.index + as_index(k, "Offset")

        if not check_index(target, self.length, self._policy, f"BufferPointer.{op}", "Offset"):
            target = 0 if target < 0 else self.length - 1

        return self._base + target

    def _span(self, count: object, op: str) -> int:
        """Validate a run of `count` elements from here, truncating it under LEGACY."""

        count = as_index(count, "Count")
        if count < 0:
            raise ContractError(f"Count must not be negative, got {count}.")

        available = self._end - self._pos
        if count > available and not check_index(
            self.index + count - 1, self.length, self._policy, f"BufferPointer.{op}", "Offset"
        ):
            count = available

        return count

    def __add__(self, n: int) -> "BufferPointer":
        return BufferPointer(self._storage, self._base, self._end, self._resolve(n, "add"), self._policy)

    def __sub__(self, n: int) -> "BufferPointer":
        return self + -as_index(n, "Offset")

    def __getitem__(self, k: int) -> Any:
        return self._storage[self._resolve(k, "getitem")]

    def __setitem__(self, k: int, value: Any) -> None:
        self._storage[self._resolve(k, "setitem")] = value

    def __iter__(self) -> Iterator:
        return iter(self._storage[self._pos : self._end])

    def read(self, count: int) -> list:
        """
        Copy `count` elements starting here into a new list.

        Raises:
            OutOfRangeError: If the run passes the end of the buffer under STRICT.
        """

        count = self._span(count, "read")
        return self._storage[self._pos : self._pos + count]

    def write(self, values: Iterable) -> int:
        """
        Copy `values` into the buffer starting here.

        Returns:
            int: Number of elements written.

        Raises:
            OutOfRangeError: If the run passes the end of the buffer under STRICT.
        """

        values = list(values)
        count = self._span(len(values), "write")
        self._storage[self._pos : self._pos + count] = values[:count]
        return count

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BufferPointer):
            return NotImplemented
        return self._storage is other._storage and self._pos == other._pos

    def __repr__(self) -> str:
        return f"BufferPointer(index={self.index}, length={self.length})"
