import unittest

import numpy as np

from gradopt.domain import OptimizerConfigurationError, ShapeMismatchError
from gradopt.infrastructure import OptimizerState
from gradopt.infrastructure.optimizers import (
    SGD,
    Adam,
    FunctionAdapter,
    FunctionOptimizer,
    to_stateful,
)


def halve(params, gradient):
    return params - 0.5 * gradient


def momentum_like(params, gradient):
    return params - 0.1 * np.sign(gradient) - 0.01 * params


class TestFunctionAdapter(unittest.TestCase):
    def test_adapter_has_no_accumulators(self):
        adapted = to_stateful(halve).initialize_with(3)
        self.assertIsInstance(adapted, FunctionAdapter)
        self.assertEqual(adapted.get_state(), {})
        self.assertEqual(adapted.state.param_count, 3)

    def test_adapter_matches_direct_rule_over_many_steps(self):
        rng = np.random.default_rng(42)
        for rule in (halve, momentum_like, SGD(learning_rate=0.3)):
            direct = rng.normal(size=5)
            adapted_params = direct.copy()
            adapted = to_stateful(rule).initialize_with(5)

            for _ in range(20):
                g = rng.normal(size=5)
                direct = np.asarray(rule(direct, g))
                adapted_params, adapted = adapted.compute_parameters(g, adapted_params)
                np.testing.assert_array_equal(adapted_params, direct)

    def test_state_params_record_last_result(self):
        adapted = to_stateful(halve).initialize_with(2)
        new_params, adapted = adapted.compute_parameters([2.0, 4.0], [1.0, 1.0])
        np.testing.assert_allclose(new_params, [0.0, -1.0])
        np.testing.assert_allclose(adapted.state.params, [0.0, -1.0])

    def test_rule_returning_optimizer_is_a_configuration_error(self):
        def make_optimizer(params, gradient):
            return Adam()

        adapted = to_stateful(make_optimizer).initialize_with(1)
        with self.assertRaises(OptimizerConfigurationError) as ctx:
            adapted.compute_parameters([1.0], [1.0])
        self.assertEqual(ctx.exception.returned, "Adam")
        self.assertIn("did you need to call the factory", str(ctx.exception))

    def test_rule_returning_mapping_is_a_configuration_error(self):
        adapted = to_stateful(lambda p, g: {"params": p}).initialize_with(1)
        with self.assertRaises(OptimizerConfigurationError):
            adapted.compute_parameters([1.0], [1.0])

    def test_rule_returning_state_is_a_configuration_error(self):
        adapted = to_stateful(lambda p, g: OptimizerState({"params": p})).initialize_with(1)
        with self.assertRaises(OptimizerConfigurationError):
            adapted.compute_parameters([1.0], [1.0])

    def test_rule_returning_rule_is_a_configuration_error(self):
        def sgd_factory(params, gradient=None):
            return lambda p, g: p - g

        with self.assertRaises(OptimizerConfigurationError):
            FunctionOptimizer(sgd_factory).compute_parameters([1.0], [1.0])

    def test_rule_returning_non_numeric_is_a_configuration_error(self):
        adapted = to_stateful(lambda p, g: object()).initialize_with(1)
        with self.assertRaises(OptimizerConfigurationError):
            adapted.compute_parameters([1.0], [1.0])

    def test_rule_returning_params_state_pair_is_a_configuration_error(self):
        adapted = to_stateful(lambda p, g: (p - g, {"acc": p})).initialize_with(2)
        with self.assertRaises(OptimizerConfigurationError) as ctx:
            adapted.compute_parameters([1.0, 1.0], [1.0, 1.0])
        self.assertEqual(ctx.exception.returned, "tuple")

    def test_rule_returning_stateful_step_result_is_a_configuration_error(self):
        inner = Adam(param_count=2)
        adapted = to_stateful(
            lambda p, g: inner.compute_parameters(g, p)
        ).initialize_with(2)
        with self.assertRaises(OptimizerConfigurationError):
            adapted.compute_parameters([1.0, 1.0], [1.0, 1.0])

    def test_rule_returning_string_is_a_configuration_error(self):
        adapted = to_stateful(lambda p, g: "oops").initialize_with(1)
        with self.assertRaises(OptimizerConfigurationError) as ctx:
            adapted.compute_parameters([1.0], [1.0])
        self.assertEqual(ctx.exception.returned, "str")

    def test_rule_returning_class_is_a_configuration_error(self):
        adapted = to_stateful(lambda p, g: Adam).initialize_with(1)
        with self.assertRaises(OptimizerConfigurationError):
            adapted.compute_parameters([1.0], [1.0])

    def test_rule_returning_matrix_raises_shape_mismatch(self):
        adapted = to_stateful(lambda p, g: np.ones((2, 2))).initialize_with(2)
        with self.assertRaises(ShapeMismatchError):
            adapted.compute_parameters([1.0, 1.0], [1.0, 1.0])

    def test_in_place_rule_is_supported(self):
        def in_place(params, gradient):
            params -= 0.5 * gradient
            return params

        adapted = to_stateful(in_place).initialize_with(2)
        new_params, _ = adapted.compute_parameters([2.0, 4.0], [1.0, 1.0])
        np.testing.assert_allclose(new_params, [0.0, -1.0])

    def test_in_place_rule_leaves_previous_state_untouched(self):
        def in_place(params, gradient):
            params -= gradient
            return params

        adapted = to_stateful(in_place).initialize_with(1)
        _, first = adapted.compute_parameters([1.0], [5.0])
        _, second = first.compute_parameters([1.0], first.state.params)
        np.testing.assert_allclose(first.state.params, [4.0])
        np.testing.assert_allclose(second.state.params, [3.0])

    def test_rule_changing_length_raises_shape_mismatch(self):
        adapted = to_stateful(lambda p, g: np.append(p, 0.0)).initialize_with(2)
        with self.assertRaises(ShapeMismatchError):
            adapted.compute_parameters([1.0, 1.0], [1.0, 1.0])

    def test_function_optimizer_returns_itself(self):
        opt = FunctionOptimizer(halve)
        new_params, opt2 = opt.compute_parameters([2.0], [1.0])
        np.testing.assert_allclose(new_params, [0.0])
        self.assertIs(opt2, opt)
        self.assertEqual(opt.get_state(), {})
        self.assertIsNone(opt.parameters())

    def test_rule_receives_float_vectors(self):
        seen = []

        def spy(params, gradient):
            seen.append((params.dtype, gradient.dtype, params.shape))
            return params

        FunctionOptimizer(spy).compute_parameters([1, 2], [3, 4])
        self.assertEqual(seen, [(np.float64, np.float64, (2,))])


if __name__ == "__main__":
    unittest.main()
