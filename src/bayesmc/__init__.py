"""
Bayesian parameter estimation for fully observed finite-state Markov chains.

Given an observed state sequence and Dirichlet priors over the initial
distribution and each transition row, computes the exact conjugate
posteriors and the log marginal likelihood (model evidence).

Core:
- PriorStore: validated Dirichlet hyperparameters (uniform or explicit)
- sufficient_statistics / compute_posteriors: closed-form count updates,
  with UpdateStrategy as the seam for other update rules
- log_evidence / total_log_evidence: Dirichlet-multinomial evidence in log-space
- MarkovPosterior: immutable posterior snapshot with Dirichlet means
- MarkovModel: constructed -> priors set -> observed -> inferred

Collaborators:
- sample_parameters / sample_chain: seeded synthetic data
- format_* / posterior_comparison: text reporting
"""

from .errors import (
    BayesMCError,
    InvalidPriorError,
    InvalidStateError,
    EmptyChainError,
    ModelStateError,
)
from .priors import PriorStore, uniform_dirichlet, validate_dirichlet
from .evidence import (
    log_normalizer,
    log_evidence,
    evidence_terms,
    total_log_evidence,
    model_evidence,
)
from .posterior import MarkovPosterior, dirichlet_mean
from .update import (
    SufficientStatistics,
    UpdateStrategy,
    ConjugateUpdate,
    validate_chain,
    sufficient_statistics,
    compute_posteriors,
)
from .model import MarkovModel, dirichlet_mode
from .sampling import row_stochastic, sample_parameters, sample_chain
from .report import (
    format_vector,
    format_parameters,
    format_priors,
    format_posteriors,
    posterior_comparison,
)

__all__ = [
    "BayesMCError",
    "InvalidPriorError",
    "InvalidStateError",
    "EmptyChainError",
    "ModelStateError",
    "PriorStore",
    "uniform_dirichlet",
    "validate_dirichlet",
    "log_normalizer",
    "log_evidence",
    "evidence_terms",
    "total_log_evidence",
    "model_evidence",
    "MarkovPosterior",
    "dirichlet_mean",
    "SufficientStatistics",
    "UpdateStrategy",
    "ConjugateUpdate",
    "validate_chain",
    "sufficient_statistics",
    "compute_posteriors",
    "MarkovModel",
    "dirichlet_mode",
    "row_stochastic",
    "sample_parameters",
    "sample_chain",
    "format_vector",
    "format_parameters",
    "format_priors",
    "format_posteriors",
    "posterior_comparison",
]
