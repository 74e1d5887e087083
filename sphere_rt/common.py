from dataclasses import dataclass, field
from typing import Optional, Union

import numpy as np
from numpy.typing import NDArray


@dataclass
class Settings:
    width: int = 800
    height: int = 600
    bounces: int = 2
    ambient: float = 0.15
    light_pos: NDArray[np.float32] = field(default_factory=lambda: np.zeros(3, dtype=np.float32))

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Image size must be positive, got {self.width}x{self.height}")
        if self.bounces < 0:
            raise ValueError(f"Bounce count must not be negative, got {self.bounces}")


@dataclass
class Sphere:
    center: NDArray[np.float32]
    radius: float
    color: NDArray[np.float32]


# Closed set of shapes a scene may hold
Primitive = Union[Sphere]


@dataclass
class World:
    objs: list[Primitive]
    light_pos: NDArray[np.float32] = field(default_factory=lambda: np.zeros(3, dtype=np.float32))
    ambient: float = 0.15

    def add_sphere(self, sphere: Optional[Sphere] = None) -> Sphere:
        if sphere is None:
            sphere = Sphere(
                center=np.zeros(3, dtype=np.float32),
                radius=1.0,
                color=np.ones(3, dtype=np.float32),
            )
        self.objs.append(sphere)
        return sphere

    def remove_sphere(self, index: int) -> Sphere:
        if not 0 <= index < len(self.objs):
            raise IndexError(f"No sphere at index {index}, scene holds {len(self.objs)}")
        return self.objs.pop(index)


def default_scene() -> list[Sphere]:
    sphere_sand = Sphere(
        center=np.array([0.0, 0.0, 3.0], dtype=np.float32),
        radius=1.0,
        color=np.array([0.75, 0.66, 0.45], dtype=np.float32),
    )
    sphere_ground = Sphere(
        center=np.array([0.0, -86.5, 3.0], dtype=np.float32),
        radius=85.0,
        color=np.array([0.0, 0.45, 0.99], dtype=np.float32),
    )
    return [sphere_sand, sphere_ground]
