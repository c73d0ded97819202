from __future__ import annotations

import importlib.util
import unittest

JAX_AVAILABLE = importlib.util.find_spec("jax") is not None


@unittest.skipUnless(JAX_AVAILABLE, "jax is required for array bridge tests")
class JaxArrayBridgeTests(unittest.TestCase):
    def test_numeric_values_to_arrays(self) -> None:
        from aplan_jax import parse, to_jax_array

        scalar = to_jax_array(parse("2.5"))
        self.assertEqual(scalar.shape, ())
        self.assertEqual(float(scalar), 2.5)

        vector = to_jax_array(parse("1 2 3"))
        self.assertEqual(vector.shape, (3,))
        self.assertEqual(vector.tolist(), [1.0, 2.0, 3.0])

        matrix = to_jax_array(parse("[1 2 ⋄ 3 4 5]"))
        self.assertEqual(matrix.shape, (2, 3))
        self.assertEqual(matrix.tolist(), [[1.0, 2.0, 0.0], [3.0, 4.0, 5.0]])

        self.assertEqual(to_jax_array(parse("⍬")).shape, (0,))
        self.assertEqual(to_jax_array(parse("[⍬ ⋄ ⍬]")).shape, (2, 0))
        self.assertEqual(complex(to_jax_array(parse("3J4"))), complex(3, 4))

    def test_non_numeric_values_are_rejected(self) -> None:
        from aplan_jax import parse, to_jax_array

        for source in ("'a'", "1 'a'", "(x: 1)", "(1 2 ⋄ 3)", "['a' ⋄ 1]"):
            with self.subTest(source=source):
                with self.assertRaises(TypeError):
                    to_jax_array(parse(source))

    def test_arrays_to_values(self) -> None:
        import jax.numpy as jnp

        from aplan_jax import ZILDE, Matrix, Number, Vector, from_jax_array, serialize

        self.assertEqual(from_jax_array(jnp.asarray(4.0)), Number(4))
        self.assertEqual(from_jax_array(jnp.arange(3)), Vector((Number(0), Number(1), Number(2))))
        self.assertIs(from_jax_array(jnp.zeros((0,))), ZILDE)
        self.assertEqual(
            from_jax_array(jnp.asarray([[True, False]])),
            Matrix((1, 2), (Number(1), Number(0))),
        )
        value = from_jax_array(jnp.arange(6).reshape(2, 3))
        self.assertEqual(serialize(value), "[\n 0 1 2\n 3 4 5\n]")

    def test_default_precision_rounds_through_jax(self) -> None:
        import jax
        import jax.numpy as jnp

        from aplan_jax import Number, from_jax_array, parse, to_jax_array

        array = to_jax_array(parse("0.1 0.5"))
        if jax.config.jax_enable_x64:
            self.assertEqual(array.dtype, jnp.float64)
            expected = 0.1
        else:
            self.assertEqual(array.dtype, jnp.float32)
            expected = float(jnp.float32(0.1))
            self.assertNotEqual(expected, 0.1)
        value = from_jax_array(array)
        self.assertEqual(value.items, (Number(expected), Number(0.5)))

    def test_array_round_trip_through_notation(self) -> None:
        import jax.numpy as jnp

        from aplan_jax import from_jax_array, parse, serialize, to_jax_array

        array = jnp.asarray([[1.5, -2.0], [0.25, 8.0]])
        text = serialize(from_jax_array(array))
        self.assertEqual(text, "[\n 1.5 ¯2\n 0.25 8\n]")
        self.assertTrue(bool(jnp.all(to_jax_array(parse(text)) == array)))


if __name__ == "__main__":
    unittest.main()
