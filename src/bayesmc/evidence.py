"""
Marginal likelihood (model evidence) of a fully observed Markov chain.

For a categorical parameter with a Dirichlet(alpha) prior, the probability
of a particular sequence of draws with counts n, integrated over the
parameter, is the ratio of Dirichlet normalizers:

  log p(draws) = logZ(alpha + n) - logZ(alpha),
  logZ(a)      = sum_i lgamma(a_i) - lgamma(sum_i a_i).

A Markov chain factorizes into the initial-state term plus one such term
per transition row, so the total log-evidence is their sum. Everything
stays in log-space; exp() is applied only by model_evidence().
"""

from __future__ import annotations
import math
import warnings
from typing import Dict, Sequence
import numpy as np
from scipy.special import gammaln

from .priors import validate_dirichlet


def log_normalizer(alpha: Sequence[float]) -> float:
    """log of the Dirichlet normalizing constant B(alpha)."""
    a = np.asarray(alpha, dtype=float)
    return float(np.sum(gammaln(a)) - gammaln(np.sum(a)))


def log_evidence(prior: Sequence[float], counts: Sequence[float]) -> float:
    """Log marginal probability of categorical draws with the given counts.

    prior must be a valid Dirichlet vector; counts must be non-negative and
    of the same length. Zero counts give 0.0 (probability one).
    """
    c = np.asarray(counts, dtype=float)
    if c.ndim != 1:
        raise ValueError(f"counts must be a vector, got shape {c.shape}")
    a = validate_dirichlet(prior, c.shape[0])
    if np.any(c < 0):
        raise ValueError("counts must be non-negative")
    return log_normalizer(a + c) - log_normalizer(a)


def evidence_terms(init_prior: np.ndarray, trans_priors: np.ndarray, stats) -> Dict[str, float]:
    """Per-factor log-evidence: 'init' and 'row0'..'row{K-1}'."""
    terms = {"init": log_evidence(init_prior, stats.init_counts)}
    for k in range(stats.num_states):
        terms[f"row{k}"] = log_evidence(trans_priors[k], stats.trans_counts[k])
    return terms


def total_log_evidence(init_prior: np.ndarray, trans_priors: np.ndarray, stats) -> float:
    """Sum of the initial-state term and every transition-row term."""
    trans_priors = np.asarray(trans_priors, dtype=float)
    if trans_priors.shape != (stats.num_states, stats.num_states):
        raise ValueError(
            f"transition priors shape {trans_priors.shape} does not match "
            f"{stats.num_states} states"
        )
    return float(math.fsum(evidence_terms(init_prior, trans_priors, stats).values()))


def model_evidence(log_ev: float) -> float:
    """exp(log_ev). Long chains underflow to 0.0; prefer the log value."""
    ev = math.exp(log_ev)
    if ev == 0.0:
        warnings.warn(
            f"model evidence underflows to 0.0 (log-evidence={log_ev:.6g}); "
            "use the log-evidence instead",
            RuntimeWarning,
            stacklevel=2,
        )
    return ev
