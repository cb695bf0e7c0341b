"""
Error taxonomy for Bayesian Markov-chain estimation.

All input errors derive from ValueError so callers that already catch
ValueError (the convention elsewhere in numeric code) keep working.
"""

from __future__ import annotations


class BayesMCError(Exception):
    """Base class for every error raised by bayesmc."""


class InvalidPriorError(BayesMCError, ValueError):
    """Non-positive pseudo-count, or a prior whose shape disagrees with K."""


class InvalidStateError(BayesMCError, ValueError):
    """An observed state value outside [0, K)."""


class EmptyChainError(BayesMCError, ValueError):
    """A chain with no states; the initial-state term needs at least one."""


class ModelStateError(BayesMCError, RuntimeError):
    """An operation was called before the model reached the required stage."""
