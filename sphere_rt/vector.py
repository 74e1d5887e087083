import numpy as np
from numpy.typing import NDArray


def vec3(x: float, y: float, z: float) -> NDArray[np.float32]:
    return np.array([x, y, z], dtype=np.float32)


def add(u: NDArray[np.float32], v: NDArray[np.float32]) -> NDArray[np.float32]:
    return u + v


def sub(u: NDArray[np.float32], v: NDArray[np.float32]) -> NDArray[np.float32]:
    return u - v


def scale(v: NDArray[np.float32], t: float) -> NDArray[np.float32]:
    return v * np.float32(t)


def dot(u: NDArray[np.float32], v: NDArray[np.float32]) -> np.float32:
    return np.sum(u * v)


def cross(u: NDArray[np.float32], v: NDArray[np.float32]) -> NDArray[np.float32]:
    return np.cross(u, v)


def length_squared(v: NDArray[np.float32]) -> np.float32:
    return dot(v, v)


def length(v: NDArray[np.float32]) -> np.float32:
    return np.sqrt(length_squared(v))


def normalize(v: NDArray[np.float32]) -> NDArray[np.float32]:
    # zero length gives nan components, callers never pass one
    with np.errstate(invalid="ignore", divide="ignore"):
        return v / length(v)


def clamp(v: NDArray[np.float32]) -> NDArray[np.float32]:
    return np.clip(v, 0.0, 1.0)
