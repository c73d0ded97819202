"""Conversion between numeric Array Notation values and jax arrays."""

from __future__ import annotations

import numbers

import jax.numpy as jnp

from .values import ZILDE, Complex, Matrix, Number, Value, Vector, Zilde, kind_of


def _scalar_payload(value: Value, *, where: str) -> float | complex:
    if isinstance(value, Number):
        return value.value
    if isinstance(value, Complex):
        return value.to_complex()
    raise TypeError(f"{where} is a {kind_of(value).value} value; only numeric cells convert to arrays")


def to_jax_array(value: Value):
    """Dense array for a numeric value.

    Cells take jax's default dtypes: float32 and complex64 unless
    ``jax_enable_x64`` is on. Numbers that do not fit single precision,
    such as ``0.1``, are rounded and come back from `from_jax_array` as the
    rounded float.
    """
    if isinstance(value, (Number, Complex)):
        return jnp.asarray(_scalar_payload(value, where="value"))
    if isinstance(value, Zilde):
        return jnp.zeros((0,))
    if isinstance(value, Vector):
        if not value.items:
            return jnp.zeros((0,))
        payload = [_scalar_payload(item, where=f"value[{idx}]") for idx, item in enumerate(value.items)]
        return jnp.asarray(payload)
    if isinstance(value, Matrix):
        if not value.cells:
            return jnp.zeros(value.shape)
        payload = [_scalar_payload(cell, where=f"value.cells[{idx}]") for idx, cell in enumerate(value.cells)]
        return jnp.asarray(payload).reshape(value.shape)
    raise TypeError(f"{kind_of(value).value} value has no dense array form")


def _scalar_value(item) -> Value:
    if isinstance(item, complex):
        return Complex.from_complex(item)
    if isinstance(item, numbers.Real):
        return Number(float(item))
    raise TypeError(f"Unsupported array element type {type(item).__name__}")


def from_jax_array(array) -> Value:
    arr = jnp.asarray(array)
    if arr.ndim == 0:
        return _scalar_value(arr.item())
    flat = [_scalar_value(item) for item in arr.reshape(-1).tolist()]
    if arr.ndim == 1:
        if not flat:
            return ZILDE
        return Vector(tuple(flat))
    return Matrix(tuple(int(d) for d in arr.shape), tuple(flat))
