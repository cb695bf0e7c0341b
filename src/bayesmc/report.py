"""
Plain-text reporting of parameters, priors and posteriors.

Formatting only; every function takes arrays or a MarkovPosterior and
returns a string (or rows), so the CLI decides where the text goes.
"""

from __future__ import annotations
from typing import Dict, List, Sequence
import numpy as np

from .posterior import MarkovPosterior, dirichlet_mean


def format_vector(v: Sequence[float], precision: int = 4) -> str:
    return "[" + " ".join(f"{float(x):.{precision}g}" for x in np.asarray(v, dtype=float)) + "]"


def _rows(label: str, init: np.ndarray, trans: np.ndarray, precision: int) -> str:
    lines = [f"{label} {format_vector(init, precision)}"]
    for i, row in enumerate(np.asarray(trans)):
        lines.append(f"[{i}] {format_vector(row, precision)}")
    return "\n".join(lines)


def format_parameters(init: np.ndarray, trans: np.ndarray, precision: int = 4) -> str:
    """Probability parameters: initial distribution then one line per transition row."""
    return _rows("init", init, trans, precision)


def format_priors(init_prior: np.ndarray, trans_priors: np.ndarray, precision: int = 4) -> str:
    """Dirichlet pseudo-counts of the prior."""
    return _rows("Dirichlet init", init_prior, trans_priors, precision)


def format_posteriors(post: MarkovPosterior, precision: int = 4) -> str:
    """Posterior pseudo-counts with their means."""
    lines = [f"Dirichlet init {format_vector(post.init, precision)}  mean {format_vector(post.init_mean(), precision)}"]
    means = post.trans_mean()
    for i in range(post.num_states):
        lines.append(
            f"[{i}] Dirichlet {format_vector(post.trans[i], precision)}  mean {format_vector(means[i], precision)}"
        )
    return "\n".join(lines)


def posterior_comparison(post: MarkovPosterior, init: np.ndarray, trans: np.ndarray) -> List[Dict[str, object]]:
    """One row per parameter vector: true value, posterior mean and max absolute error."""
    rows: List[Dict[str, object]] = []
    truth = [("init", np.asarray(init, dtype=float), post.init)]
    truth += [(f"row{i}", np.asarray(trans[i], dtype=float), post.trans[i]) for i in range(post.num_states)]
    for name, true_p, alpha in truth:
        mean = dirichlet_mean(alpha)
        rows.append({
            "param": name,
            "true": true_p.tolist(),
            "posterior_mean": mean.tolist(),
            "max_abs_err": float(np.max(np.abs(mean - true_p))),
        })
    return rows
