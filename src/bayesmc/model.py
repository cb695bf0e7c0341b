"""
MarkovModel: a first-order K-state chain of fixed length T with Dirichlet
priors on the initial distribution and on every transition row.

Lifecycle:
  constructed -> priors_set -> observed -> inferred

Priors and data may be set in either order; infer_posteriors() needs both.
Setting new priors or new data drops any previous posterior, which is then
recomputed in full on the next inference call.
"""

from __future__ import annotations
import logging
from typing import Optional, Sequence, Tuple
import numpy as np

from .errors import ModelStateError
from .posterior import MarkovPosterior, dirichlet_mean
from .priors import PriorStore, positive_int
from .sampling import row_stochastic
from .update import UpdateStrategy, compute_posteriors, validate_chain

logger = logging.getLogger(__name__)


def dirichlet_mode(alpha: np.ndarray) -> np.ndarray:
    """Row-wise Dirichlet mode (alpha-1)/(sum(alpha)-K); rows with any alpha<=1 fall back to the mean."""
    a = np.atleast_2d(np.asarray(alpha, dtype=float))
    out = dirichlet_mean(a)
    k = a.shape[1]
    interior = np.all(a > 1.0, axis=1)
    out[interior] = (a[interior] - 1.0) / (a[interior].sum(axis=1, keepdims=True) - k)
    return out.reshape(np.shape(alpha))


class MarkovModel:
    def __init__(self, chain_length: int, num_states: int, strategy: UpdateStrategy | None = None):
        self.T = positive_int(chain_length, "chain_length")
        self.K = positive_int(num_states, "num_states")
        self.strategy = strategy
        self._priors = PriorStore(self.K)
        self._data: Optional[np.ndarray] = None
        self._posterior: Optional[MarkovPosterior] = None
        self._init_param: Optional[np.ndarray] = None
        self._trans_param: Optional[np.ndarray] = None

    @property
    def state(self) -> str:
        if self._posterior is not None:
            return "inferred"
        if self._data is not None:
            return "observed"
        if self._priors.is_set:
            return "priors_set"
        return "constructed"

    # ---- priors ----

    @property
    def priors(self) -> PriorStore:
        """A copy of the prior store; change priors through set_priors()."""
        return self._priors.copy()

    def set_uninformed_priors(self) -> None:
        self._priors.set_uninformed_priors(self.K)
        self._posterior = None
        logger.debug("uniform Dirichlet priors set for %d states", self.K)

    def set_priors(self, init_prior: Sequence[float], trans_priors: Sequence[Sequence[float]]) -> None:
        self._priors.set_priors(init_prior, trans_priors)
        self._posterior = None
        logger.debug("explicit Dirichlet priors set for %d states", self.K)

    # ---- data ----

    def observe_data(self, chain: Sequence[int]) -> None:
        """Record an observed chain of exactly chain_length states."""
        x = validate_chain(chain, self.K)
        if x.shape[0] != self.T:
            raise ValueError(f"expected a chain of length {self.T}, got {x.shape[0]}")
        self._data = x.copy()
        self._posterior = None
        logger.debug("observed chain of length %d", self.T)

    @property
    def data(self) -> np.ndarray:
        if self._data is None:
            raise ModelStateError("no data observed")
        return self._data.copy()

    # ---- inference ----

    def infer_posteriors(self) -> MarkovPosterior:
        if not self._priors.is_set:
            raise ModelStateError("priors must be set before inference")
        if self._data is None:
            raise ModelStateError("data must be observed before inference")
        self._posterior = compute_posteriors(self._data, self._priors, strategy=self.strategy)
        logger.debug("inferred posteriors, log-evidence=%.6g", self._posterior.log_evidence)
        return self._posterior

    @property
    def posterior(self) -> MarkovPosterior:
        if self._posterior is None:
            raise ModelStateError("posteriors have not been inferred")
        return self._posterior

    # ---- fixed parameters ----

    def set_parameters(self, init: Sequence[float], trans: Sequence[Sequence[float]]) -> None:
        """Fix probability parameters (e.g. the ground truth used to generate data)."""
        p0 = np.asarray(init, dtype=float)
        P = np.asarray(trans, dtype=float)
        if p0.shape != (self.K,) or P.shape != (self.K, self.K):
            raise ValueError(f"parameters must have shapes ({self.K},) and ({self.K}, {self.K})")
        if np.any(p0 < 0) or not np.isclose(p0.sum(), 1.0):
            raise ValueError("initial probabilities must be non-negative and sum to 1")
        if np.any(P < 0) or not np.allclose(P.sum(axis=1), 1.0):
            raise ValueError("transition rows must be non-negative and sum to 1")
        self._init_param = p0.copy()
        self._trans_param = row_stochastic(P)

    def set_parameters_to_map_estimates(self) -> None:
        """Fix parameters to the posterior mode of every Dirichlet."""
        post = self.posterior
        self.set_parameters(dirichlet_mode(post.init), dirichlet_mode(post.trans))

    @property
    def parameters(self) -> Tuple[np.ndarray, np.ndarray]:
        if self._init_param is None:
            raise ModelStateError("parameters have not been set")
        return self._init_param.copy(), self._trans_param.copy()

    def __repr__(self) -> str:
        return f"MarkovModel(chain_length={self.T}, num_states={self.K}, state={self.state!r})"
