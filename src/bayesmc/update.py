"""
Conjugate Dirichlet-categorical updates for a fully observed Markov chain.

Every state of the chain is observed, so the posterior over the initial
distribution and over each transition row is again Dirichlet, obtained by
adding the observed counts to the prior pseudo-counts:

  posterior_init     = prior_init + onehot(chain[0])
  posterior_trans[k] = prior_trans[k] + #{t : chain[t-1] = k, chain[t] = j}_j

UpdateStrategy is the seam for other update rules (e.g. approximate
inference once some states are hidden); ConjugateUpdate is the exact one
and the default.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Sequence, Tuple
import numpy as np

from .errors import EmptyChainError, InvalidStateError
from .evidence import total_log_evidence
from .posterior import MarkovPosterior
from .priors import PriorStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class SufficientStatistics:
    """Initial one-hot counts (K,) and transition counts (K, K) of a chain."""
    init_counts: np.ndarray
    trans_counts: np.ndarray

    def __post_init__(self):
        for name in ("init_counts", "trans_counts"):
            a = np.array(getattr(self, name), dtype=float, copy=True)
            a.setflags(write=False)
            object.__setattr__(self, name, a)

    @property
    def num_states(self) -> int:
        return int(self.init_counts.shape[0])

    @property
    def chain_length(self) -> int:
        return int(self.trans_counts.sum()) + 1

    def state_visits(self) -> np.ndarray:
        """Occurrences of each state at positions 0..T-2 (row sums of the counts)."""
        return self.trans_counts.sum(axis=1)


def validate_chain(chain: Sequence[int], k: int) -> np.ndarray:
    """Return chain as an int array, rejecting empty chains and states outside [0, k)."""
    x = np.asarray(chain)
    if x.ndim != 1:
        raise InvalidStateError(f"chain must be one-dimensional, got shape {x.shape}")
    if x.size == 0:
        raise EmptyChainError("chain is empty; the initial state is required")
    if x.dtype.kind not in "iu":
        if x.dtype.kind != "f" or not np.all(np.isfinite(x)) or np.any(x != np.round(x)):
            raise InvalidStateError(f"states must be integers, got dtype {x.dtype}")
    bad = np.flatnonzero((x < 0) | (x >= k))
    if bad.size:
        i = int(bad[0])
        raise InvalidStateError(f"state {x[i]} at position {i} is outside [0, {k})")
    return x.astype(np.int64)


def sufficient_statistics(chain: Sequence[int], k: int) -> SufficientStatistics:
    """Count the initial state and every transition of a fully observed chain."""
    x = validate_chain(chain, k)
    init = np.zeros(k, dtype=float)
    init[x[0]] = 1.0
    C = np.zeros((k, k), dtype=float)
    np.add.at(C, (x[:-1], x[1:]), 1.0)
    return SufficientStatistics(init_counts=init, trans_counts=C)


class UpdateStrategy:
    """Turns priors plus sufficient statistics into posterior Dirichlet parameters."""
    def update(
        self,
        init_prior: np.ndarray,
        trans_priors: np.ndarray,
        stats: SufficientStatistics,
    ) -> Tuple[np.ndarray, np.ndarray]:
        raise NotImplementedError


class ConjugateUpdate(UpdateStrategy):
    """Exact closed-form update: add counts to pseudo-counts."""
    def update(self, init_prior, trans_priors, stats):
        init_prior = np.asarray(init_prior, dtype=float)
        trans_priors = np.asarray(trans_priors, dtype=float)
        if init_prior.shape != stats.init_counts.shape or trans_priors.shape != stats.trans_counts.shape:
            raise ValueError(
                f"prior shapes {init_prior.shape}/{trans_priors.shape} do not match "
                f"statistics for {stats.num_states} states"
            )
        return init_prior + stats.init_counts, trans_priors + stats.trans_counts


def compute_posteriors(
    chain: Sequence[int],
    priors: PriorStore,
    strategy: UpdateStrategy | None = None,
) -> MarkovPosterior:
    """Posterior Dirichlet parameters and total log-evidence for an observed chain.

    Pure function of (chain, priors): priors are read, never modified, and
    repeated calls return equal snapshots.
    """
    if strategy is None:
        strategy = ConjugateUpdate()
    init_prior = priors.init_prior
    trans_priors = priors.trans_priors
    stats = sufficient_statistics(chain, priors.num_states)
    post_init, post_trans = strategy.update(init_prior, trans_priors, stats)
    log_ev = total_log_evidence(init_prior, trans_priors, stats)
    logger.debug(
        "posterior over %d states from chain of length %d: log-evidence=%.6g",
        stats.num_states, stats.chain_length, log_ev,
    )
    return MarkovPosterior(init=post_init, trans=post_trans, log_evidence=log_ev, stats=stats)
