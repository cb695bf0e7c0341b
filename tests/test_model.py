import math
import numpy as np
import pytest
from bayesmc.errors import EmptyChainError, InvalidPriorError, InvalidStateError, ModelStateError
from bayesmc.model import MarkovModel, dirichlet_mode


def test_construction_validation():
    with pytest.raises(ValueError):
        MarkovModel(0, 3)
    with pytest.raises(ValueError):
        MarkovModel(4, 0)


@pytest.mark.parametrize("T, K", [(2.7, 3), (4, 3.9), (True, 2), ("4", 2)])
def test_construction_rejects_non_integer_sizes(T, K):
    with pytest.raises(ValueError):
        MarkovModel(T, K)


def test_integral_float_sizes_accepted():
    model = MarkovModel(4.0, 3.0)
    assert (model.T, model.K) == (4, 3)


def test_priors_view_cannot_bypass_lifecycle():
    model = MarkovModel(3, 2)
    model.set_uninformed_priors()
    model.observe_data([0, 1, 1])
    model.infer_posteriors()
    view = model.priors
    view.set_priors([5.0, 5.0], [[5.0, 5.0], [5.0, 5.0]])
    assert model.state == "inferred"
    np.testing.assert_array_equal(model.priors.init_prior, [1.0, 1.0])
    np.testing.assert_array_equal(model.posterior.init, [2.0, 1.0])
    assert model.infer_posteriors() == model.posterior


def test_lifecycle():
    model = MarkovModel(4, 3)
    assert model.state == "constructed"
    model.set_uninformed_priors()
    assert model.state == "priors_set"
    model.observe_data([0, 1, 2, 0])
    assert model.state == "observed"
    post = model.infer_posteriors()
    assert model.state == "inferred"
    assert model.posterior is post
    np.testing.assert_array_equal(post.init, [2, 1, 1])
    assert post.log_evidence == pytest.approx(4 * math.log(1 / 3))


def test_inference_requires_priors_and_data():
    model = MarkovModel(2, 2)
    with pytest.raises(ModelStateError):
        model.infer_posteriors()
    model.observe_data([0, 1])
    with pytest.raises(ModelStateError):
        model.infer_posteriors()
    with pytest.raises(ModelStateError):
        model.posterior


def test_data_before_priors():
    model = MarkovModel(3, 2)
    model.observe_data([1, 1, 0])
    model.set_priors([1.0, 2.0], [[1.0, 1.0], [3.0, 1.0]])
    post = model.infer_posteriors()
    np.testing.assert_array_equal(post.init, [1.0, 3.0])
    np.testing.assert_array_equal(post.trans, [[1.0, 1.0], [4.0, 2.0]])


def test_observe_data_validation():
    model = MarkovModel(3, 2)
    with pytest.raises(ValueError):
        model.observe_data([0, 1])
    with pytest.raises(InvalidStateError):
        model.observe_data([0, 1, 2])
    with pytest.raises(EmptyChainError):
        model.observe_data([])
    with pytest.raises(ModelStateError):
        model.data


def test_observed_data_is_copied():
    chain = np.array([0, 1, 1])
    model = MarkovModel(3, 2)
    model.observe_data(chain)
    chain[0] = 1
    np.testing.assert_array_equal(model.data, [0, 1, 1])


def test_new_priors_invalidate_posterior():
    model = MarkovModel(3, 2)
    model.set_uninformed_priors()
    model.observe_data([0, 1, 1])
    first = model.infer_posteriors()
    model.set_priors([5.0, 5.0], [[5.0, 5.0], [5.0, 5.0]])
    assert model.state == "observed"
    second = model.infer_posteriors()
    assert first != second
    np.testing.assert_array_equal(second.init, [6.0, 5.0])


def test_invalid_priors_rejected():
    model = MarkovModel(3, 2)
    with pytest.raises(InvalidPriorError):
        model.set_priors([1.0, 1.0], [[1.0, 1.0], [1.0, 1.0], [1.0, 1.0]])
    assert model.state == "constructed"


def test_repeated_inference_identical():
    rng = np.random.default_rng(3)
    x = rng.integers(0, 3, size=100)
    model = MarkovModel(100, 3)
    model.set_uninformed_priors()
    model.observe_data(x)
    a = model.infer_posteriors()
    b = model.infer_posteriors()
    np.testing.assert_array_equal(a.init, b.init)
    np.testing.assert_array_equal(a.trans, b.trans)
    assert a.log_evidence == b.log_evidence


def test_dirichlet_mode():
    # an entry <= 1 puts the mode on the boundary; the mean is used instead
    np.testing.assert_allclose(dirichlet_mode([3.0, 2.0, 1.0]), [0.5, 1 / 3, 1 / 6])
    np.testing.assert_allclose(dirichlet_mode([3.0, 2.0, 2.0]), [0.5, 0.25, 0.25])
    rows = dirichlet_mode(np.array([[3.0, 2.0], [0.5, 1.5]]))
    np.testing.assert_allclose(rows, [[2 / 3, 1 / 3], [0.25, 0.75]])


class TestParameters:
    def test_set_parameters(self):
        model = MarkovModel(5, 2)
        model.set_parameters([0.3, 0.7], [[0.9, 0.1], [0.4, 0.6]])
        init, trans = model.parameters
        np.testing.assert_allclose(init, [0.3, 0.7])
        np.testing.assert_allclose(trans, [[0.9, 0.1], [0.4, 0.6]])

    def test_set_parameters_validation(self):
        model = MarkovModel(5, 2)
        with pytest.raises(ValueError):
            model.set_parameters([0.5, 0.6], [[0.9, 0.1], [0.4, 0.6]])
        with pytest.raises(ValueError):
            model.set_parameters([0.5, 0.5], [[0.9, 0.2], [0.4, 0.6]])
        with pytest.raises(ValueError):
            model.set_parameters([0.5, 0.5], [[0.9, 0.1]])
        with pytest.raises(ModelStateError):
            model.parameters

    def test_map_estimates(self):
        model = MarkovModel(6, 2)
        model.set_priors([2.0, 2.0], [[2.0, 2.0], [2.0, 2.0]])
        model.observe_data([0, 0, 0, 1, 1, 0])
        model.infer_posteriors()
        model.set_parameters_to_map_estimates()
        init, trans = model.parameters
        # posterior init (3,2) -> mode (2/3, 1/3); row0 (4,3) -> (3/5, 2/5); row1 (3,3) -> (1/2, 1/2)
        np.testing.assert_allclose(init, [2 / 3, 1 / 3])
        np.testing.assert_allclose(trans, [[0.6, 0.4], [0.5, 0.5]])

    def test_map_estimates_need_posterior(self):
        model = MarkovModel(2, 2)
        with pytest.raises(ModelStateError):
            model.set_parameters_to_map_estimates()
