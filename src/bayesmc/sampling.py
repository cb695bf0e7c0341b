"""
Synthetic data for demos and tests.

- Ground-truth parameters drawn from Dirichlet priors.
- A Markov chain sampler with explicit RNG threading.

Probability vectors are renormalized before every categorical draw so
inputs that sum to slightly less (or more) than one are not biased toward
the last state. Negative entries and all-zero rows are rejected.
"""

from __future__ import annotations
from typing import Sequence, Tuple
import numpy as np


def _normalized(p: Sequence[float], name: str = "probabilities") -> np.ndarray:
    """Return p / sum(p), raising ValueError on negative, non-finite or all-zero input."""
    p = np.asarray(p, dtype=float)
    if not np.all(np.isfinite(p)) or np.any(p < 0):
        raise ValueError(f"{name} must be finite and non-negative")
    s = float(p.sum(axis=-1, keepdims=True).min()) if p.size else 0.0
    if s <= 0.0:
        raise ValueError(f"{name} must have positive mass")
    return p / p.sum(axis=-1, keepdims=True)


def row_stochastic(T: np.ndarray) -> np.ndarray:
    """Row-normalized copy of a non-negative square matrix."""
    T = np.asarray(T, dtype=float)
    if T.ndim != 2 or T.shape[0] != T.shape[1]:
        raise ValueError(f"transition matrix must be square, got shape {T.shape}")
    return _normalized(T, name="transition rows")


def sample_parameters(
    init_prior: Sequence[float],
    trans_priors: Sequence[Sequence[float]],
    rng: np.random.Generator | None = None,
) -> Tuple[np.ndarray, np.ndarray]:
    """Draw an initial distribution and a transition matrix from Dirichlet priors."""
    if rng is None:
        rng = np.random.default_rng()
    init = rng.dirichlet(np.asarray(init_prior, dtype=float))
    trans = np.vstack([rng.dirichlet(np.asarray(r, dtype=float)) for r in trans_priors])
    return init, trans


def sample_chain(
    init: Sequence[float],
    trans: np.ndarray,
    n: int,
    rng: np.random.Generator | None = None,
) -> np.ndarray:
    """Sample a length-n state path given initial and transition probabilities."""
    if n < 1:
        raise ValueError(f"chain length must be >= 1, got {n}")
    T = row_stochastic(trans)
    pi = _normalized(init, name="initial distribution")
    k = T.shape[0]
    if pi.shape != (k,):
        raise ValueError(f"initial distribution has shape {pi.shape}, expected ({k},)")
    if rng is None:
        rng = np.random.default_rng()
    x = np.zeros(n, dtype=int)
    x[0] = rng.choice(k, p=pi)
    for t in range(1, n):
        x[t] = rng.choice(k, p=T[x[t - 1]])
    return x
