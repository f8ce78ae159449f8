"""Piecewise-constant functions of time.

A :class:`Mapping` stores strictly increasing key times and one value per key.
The value at ``t`` is the value of the last key at or before ``t``; before the
first key the mapping's ``default`` applies.  Mappings are immutable: every
combination returns a new mapping and the stored arrays are read-only.
"""

from __future__ import annotations

from typing import Iterable, Tuple

import numpy as np


class Mapping:
    """Real-valued step function over a single time axis.

    Parameters
    ----------
    times : Iterable[float]
        Strictly increasing key times (s).
    values : Iterable[float]
        Value holding from each key until the next one.
    default : float
        Value before the first key and everywhere on an empty mapping.
    """

    __slots__ = ("_times", "_values", "_default")

    def __init__(
        self,
        times: Iterable[float] = (),
        values: Iterable[float] = (),
        default: float = 0.0,
    ) -> None:
        t = np.array(times, dtype=np.float64).reshape(-1)
        v = np.array(values, dtype=np.float64).reshape(-1)
        if t.shape != v.shape:
            raise ValueError(
                f"times and values differ in length ({t.size} != {v.size})"
            )
        if t.size > 1 and np.any(np.diff(t) <= 0):
            raise ValueError("Mapping keys must be strictly increasing")
        t.setflags(write=False)
        v.setflags(write=False)
        self._times = t
        self._values = v
        self._default = float(default)

    # ------------------------------------------------------------------
    @classmethod
    def constant(cls, value: float, start: float) -> "Mapping":
        """``value`` from ``start`` onwards, zero before."""
        return cls([start], [value])

    @classmethod
    def pulse(cls, value: float, start: float, end: float) -> "Mapping":
        """``value`` on ``[start, end)``, zero elsewhere."""
        if end <= start:
            raise ValueError(f"pulse end ({end}) must be after its start ({start})")
        return cls([start, end], [value, 0.0])

    # ------------------------------------------------------------------
    @property
    def times(self) -> np.ndarray:
        return self._times

    @property
    def values(self) -> np.ndarray:
        return self._values

    @property
    def default(self) -> float:
        return self._default

    @property
    def is_empty(self) -> bool:
        """True when the mapping has no keys at all."""
        return self._times.size == 0

    def __len__(self) -> int:
        return int(self._times.size)

    def __repr__(self) -> str:
        pairs = ", ".join(f"{t:g}: {v:g}" for t, v in zip(self._times, self._values))
        return f"Mapping({{{pairs}}}, default={self._default:g})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Mapping):
            return NotImplemented
        return (
            self._default == other._default
            and np.array_equal(self._times, other._times)
            and np.array_equal(self._values, other._values)
        )

    __hash__ = None  # type: ignore[assignment]

    # ------------------------------------------------------------------
    def value_at(self, t: float) -> float:
        """Value of the function at time *t*."""
        idx = int(np.searchsorted(self._times, t, side="right")) - 1
        if idx < 0:
            return self._default
        return float(self._values[idx])

    def values_at(self, ts: np.ndarray) -> np.ndarray:
        """Vectorised :meth:`value_at`."""
        ts = np.asarray(ts, dtype=np.float64)
        if self.is_empty:
            return np.full(ts.shape, self._default)
        idx = np.searchsorted(self._times, ts, side="right") - 1
        return np.where(idx >= 0, self._values[np.clip(idx, 0, None)], self._default)

    def _interval_samples(self, start: float, end: float, include_end: bool) -> np.ndarray:
        if end < start:
            raise ValueError(f"Interval end ({end}) lies before its start ({start})")
        upper = self._times <= end if include_end else self._times < end
        inner = self._times[(self._times > start) & upper]
        return self.values_at(np.concatenate(([start], inner)))

    def find_max(self, start: float, end: float, include_end: bool = True) -> float:
        """Maximum over ``[start, end]`` (``[start, end)`` without *include_end*).

        Returns ``-inf`` for an empty mapping, so "nothing contributed" can be
        told apart from "zero power".
        """
        if self.is_empty:
            return float("-inf")
        return float(np.max(self._interval_samples(start, end, include_end)))

    def find_min(self, start: float, end: float, include_end: bool = True) -> float:
        """Minimum over the interval; ``+inf`` for an empty mapping."""
        if self.is_empty:
            return float("inf")
        return float(np.min(self._interval_samples(start, end, include_end)))

    # ------------------------------------------------------------------
    def _aligned(self, other: "Mapping") -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        keys = np.union1d(self._times, other._times)
        return keys, self.values_at(keys), other.values_at(keys)

    def add(self, other: "Mapping") -> "Mapping":
        """Pointwise sum."""
        keys, a, b = self._aligned(other)
        return Mapping(keys, a + b, self._default + other._default)

    __add__ = add

    def divide(self, other: "Mapping", zero_fallback: float) -> "Mapping":
        """Pointwise quotient ``self / other``.

        Wherever *other* is exactly zero the result is *zero_fallback*, unless
        *self* is zero there as well: ``0 / 0`` is ``0``.
        """
        keys, a, b = self._aligned(other)
        with np.errstate(divide="ignore", invalid="ignore"):
            quotient = np.where(b == 0.0, np.where(a == 0.0, 0.0, zero_fallback), a / b)
        if other._default == 0.0:
            default = 0.0 if self._default == 0.0 else zero_fallback
        else:
            default = self._default / other._default
        return Mapping(keys, quotient, default)
