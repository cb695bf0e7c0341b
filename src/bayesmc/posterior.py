"""
Immutable posterior snapshot produced by one inference call.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, Optional
import numpy as np

from .evidence import model_evidence

if TYPE_CHECKING:
    from .update import SufficientStatistics


def dirichlet_mean(alpha: np.ndarray) -> np.ndarray:
    """Mean of Dirichlet(alpha): alpha / sum(alpha). Works row-wise on 2-D input."""
    a = np.asarray(alpha, dtype=float)
    return a / a.sum(axis=-1, keepdims=True)


def _frozen(a: np.ndarray) -> np.ndarray:
    a = np.array(a, dtype=float, copy=True)
    a.setflags(write=False)
    return a


@dataclass(frozen=True, eq=False)
class MarkovPosterior:
    """Posterior Dirichlet parameters and log-evidence for one observed chain.

    init is the posterior over the initial distribution; trans[k] is the
    posterior over the row of the transition matrix leaving state k.
    Arrays are read-only copies, so a snapshot never changes after creation.
    """
    init: np.ndarray
    trans: np.ndarray
    log_evidence: float
    stats: Optional[SufficientStatistics] = field(default=None, compare=False)

    def __post_init__(self):
        init = _frozen(self.init)
        trans = _frozen(self.trans)
        k = init.shape[0]
        if init.ndim != 1 or trans.shape != (k, k):
            raise ValueError(f"inconsistent posterior shapes: init {init.shape}, trans {trans.shape}")
        object.__setattr__(self, "init", init)
        object.__setattr__(self, "trans", trans)
        object.__setattr__(self, "log_evidence", float(self.log_evidence))

    @property
    def num_states(self) -> int:
        return int(self.init.shape[0])

    @property
    def evidence(self) -> float:
        """exp(log_evidence); warns and returns 0.0 when it underflows."""
        return model_evidence(self.log_evidence)

    def row(self, k: int) -> np.ndarray:
        return self.trans[int(k)]

    def init_mean(self) -> np.ndarray:
        return dirichlet_mean(self.init)

    def trans_mean(self) -> np.ndarray:
        return dirichlet_mean(self.trans)

    def as_dict(self) -> Dict[str, Any]:
        """JSON-friendly view (plain lists and floats)."""
        return {
            "num_states": self.num_states,
            "init": self.init.tolist(),
            "trans": self.trans.tolist(),
            "init_mean": self.init_mean().tolist(),
            "trans_mean": self.trans_mean().tolist(),
            "log_evidence": self.log_evidence,
        }

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MarkovPosterior):
            return NotImplemented
        return (
            np.array_equal(self.init, other.init)
            and np.array_equal(self.trans, other.trans)
            and self.log_evidence == other.log_evidence
        )

