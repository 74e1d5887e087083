from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from sphere_rt.vector import vec3


@dataclass(frozen=True)
class Pose:
    position: NDArray[np.float32]
    orientation: NDArray[np.float32]


def rotation_x(angle: float) -> NDArray[np.float32]:
    c, s = np.cos(angle), np.sin(angle)
    return np.array([
        [1.0, 0.0, 0.0],
        [0.0, c, -s],
        [0.0, s, c],
    ], dtype=np.float32)


def rotation_y(angle: float) -> NDArray[np.float32]:
    c, s = np.cos(angle), np.sin(angle)
    return np.array([
        [c, 0.0, s],
        [0.0, 1.0, 0.0],
        [-s, 0.0, c],
    ], dtype=np.float32)


def rotation_z(angle: float) -> NDArray[np.float32]:
    c, s = np.cos(angle), np.sin(angle)
    return np.array([
        [c, -s, 0.0],
        [s, c, 0.0],
        [0.0, 0.0, 1.0],
    ], dtype=np.float32)


def compute_pose(
    rot_x: float,
    rot_y: float,
    rot_z: float,
    trans_x: float,
    trans_y: float,
    trans_z: float,
) -> Pose:
    """Build the camera pose for one render pass.

    The orientation is ``Rx @ Ry @ Rz``; the position is the translation as
    given, nothing is carried over from an earlier pose.
    """
    orientation = rotation_x(rot_x) @ rotation_y(rot_y) @ rotation_z(rot_z)
    return Pose(
        position=vec3(trans_x, trans_y, trans_z),
        orientation=orientation,
    )


@dataclass
class CameraTransform:
    rot_x: float = 0.0
    rot_y: float = 0.0
    rot_z: float = 0.0
    trans_x: float = 0.0
    trans_y: float = 0.0
    trans_z: float = 0.0

    def pose(self) -> Pose:
        return compute_pose(
            self.rot_x,
            self.rot_y,
            self.rot_z,
            self.trans_x,
            self.trans_y,
            self.trans_z,
        )
