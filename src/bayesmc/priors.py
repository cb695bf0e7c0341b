"""
Dirichlet prior store for the initial distribution and transition rows.

A prior is K+1 Dirichlet parameter vectors over a K-state chain: one for
the initial state and one per transition row (row k governs the state that
follows state k). Every pseudo-count must be strictly positive and finite.
Invalid input raises InvalidPriorError at set time; nothing is clamped.
"""

from __future__ import annotations
from typing import Sequence
import numpy as np

from .errors import InvalidPriorError, ModelStateError


def positive_int(value, name: str) -> int:
    """Return value as an int, raising ValueError unless it is a whole number >= 1."""
    try:
        n = int(value)
    except (TypeError, ValueError) as e:
        raise ValueError(f"{name} must be a positive integer, got {value!r}") from e
    if isinstance(value, bool) or n != value or n < 1:
        raise ValueError(f"{name} must be a positive integer, got {value!r}")
    return n


def uniform_dirichlet(k: int, pseudo_count: float = 1.0) -> np.ndarray:
    """Symmetric Dirichlet parameters (pseudo_count, ..., pseudo_count) of length k."""
    try:
        k = positive_int(k, "Dirichlet dimension")
    except ValueError as e:
        raise InvalidPriorError(str(e)) from e
    if not np.isfinite(pseudo_count) or pseudo_count <= 0:
        raise InvalidPriorError(f"pseudo_count must be positive, got {pseudo_count}")
    return np.full(int(k), float(pseudo_count), dtype=float)


def validate_dirichlet(alpha: Sequence[float], k: int, name: str = "prior") -> np.ndarray:
    """Return alpha as a float copy after checking length k and positivity."""
    try:
        a = np.array(alpha, dtype=float)
    except (TypeError, ValueError) as e:
        raise InvalidPriorError(f"{name}: not a numeric vector ({e})") from e
    if a.ndim != 1 or a.shape[0] != k:
        raise InvalidPriorError(f"{name}: expected length {k}, got shape {a.shape}")
    if not np.all(np.isfinite(a)):
        raise InvalidPriorError(f"{name}: pseudo-counts must be finite")
    if np.any(a <= 0.0):
        raise InvalidPriorError(f"{name}: pseudo-counts must be > 0, got {a.tolist()}")
    return a


class PriorStore:
    """Holds validated Dirichlet hyperparameters for a K-state chain."""
    def __init__(self, num_states: int):
        self.k = positive_int(num_states, "num_states")
        self._init: np.ndarray | None = None
        self._trans: np.ndarray | None = None

    @property
    def num_states(self) -> int:
        return self.k

    @property
    def is_set(self) -> bool:
        return self._init is not None

    def set_uninformed_priors(self, k: int | None = None, pseudo_count: float = 1.0) -> None:
        """Set Dirichlet(1, ..., 1) (or another symmetric count) everywhere."""
        if k is not None and k != self.k:
            raise InvalidPriorError(f"store has {self.k} states, got k={k}")
        self._init = uniform_dirichlet(self.k, pseudo_count)
        self._trans = np.vstack([uniform_dirichlet(self.k, pseudo_count) for _ in range(self.k)])

    def set_priors(self, init_prior: Sequence[float], trans_priors: Sequence[Sequence[float]]) -> None:
        """Store caller-supplied priors; all K+1 vectors are validated before anything is stored."""
        init = validate_dirichlet(init_prior, self.k, name="init prior")
        try:
            rows = list(trans_priors)
        except TypeError as e:
            raise InvalidPriorError(f"transition priors: expected {self.k} rows ({e})") from e
        if len(rows) != self.k:
            raise InvalidPriorError(f"expected {self.k} transition rows, got {len(rows)}")
        trans = np.vstack([
            validate_dirichlet(r, self.k, name=f"transition prior row {i}")
            for i, r in enumerate(rows)
        ])
        self._init = init
        self._trans = trans

    @property
    def init_prior(self) -> np.ndarray:
        if self._init is None:
            raise ModelStateError("priors have not been set")
        return self._init.copy()

    @property
    def trans_priors(self) -> np.ndarray:
        if self._trans is None:
            raise ModelStateError("priors have not been set")
        return self._trans.copy()

    def copy(self) -> "PriorStore":
        other = PriorStore(self.k)
        if self._init is not None:
            other._init = self._init.copy()
            other._trans = self._trans.copy()
        return other
