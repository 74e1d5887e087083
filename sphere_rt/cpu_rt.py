import logging
import time
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

import numpy as np
from numpy.typing import NDArray

from sphere_rt.app import App
from sphere_rt.camera import CameraTransform, Pose
from sphere_rt.common import Primitive, Sphere
from sphere_rt.vector import add, clamp, dot, length_squared, normalize, scale, sub, vec3

logger = logging.getLogger(__name__)

BOUNCE_EPSILON = 0.01
VIEWPORT_DEPTH = 5.0


@dataclass
class Ray:
    origin: NDArray[np.float32]
    direction: NDArray[np.float32]

    def at(self, t: float) -> NDArray[np.float32]:
        return add(self.origin, scale(self.direction, t))


@dataclass
class HitRecord:
    point: NDArray[np.float32]
    dist2: float  # squared distance from the ray origin
    normal: NDArray[np.float32]  # not normalized
    obj: Primitive


def intersect_sphere(sphere: Sphere, ray: Ray) -> Optional[HitRecord]:
    o, d, c = ray.origin, ray.direction, sphere.center

    # sphere center behind the ray origin
    if dot(d, sub(c, o)) < 0:
        return None

    a = dot(d, d)
    if a == 0:
        return None

    b = 2 * dot(o, d) - 2 * dot(d, c)
    cc = dot(c, c) - 2 * dot(c, o) + dot(o, o) - np.float32(sphere.radius) ** 2
    delta = b * b - 4 * a * cc
    if delta < 0:
        return None

    sqrt_delta = np.sqrt(delta)
    p1 = ray.at((-b + sqrt_delta) / (2 * a))
    p2 = ray.at((-b - sqrt_delta) / (2 * a))

    # prefer the point whose outward normal faces the ray
    point = p2 if dot(sub(p1, c), d) > 0 else p1
    return HitRecord(
        point=point,
        dist2=length_squared(sub(point, o)),
        normal=sub(point, c),
        obj=sphere,
    )


def intersect(obj: Primitive, ray: Ray) -> Optional[HitRecord]:
    if isinstance(obj, Sphere):
        return intersect_sphere(obj, ray)
    raise TypeError(f"Unsupported scene object: {type(obj).__name__}")


def collides(obj: Primitive, ray: Ray) -> bool:
    return intersect(obj, ray) is not None


def cast(objs: Sequence[Primitive], ray: Ray) -> Optional[HitRecord]:
    nearest: Optional[HitRecord] = None
    for obj in objs:
        hit = intersect(obj, ray)
        if hit is not None and (nearest is None or hit.dist2 < nearest.dist2):
            nearest = hit
    return nearest


def shade(hit: HitRecord, light_pos: NDArray[np.float32], ambient: float) -> NDArray[np.float32]:
    normal = normalize(hit.normal)
    to_point = sub(hit.point, light_pos)

    # a light sitting on the surface adds no diffuse term
    diffuse = 0
    if length_squared(to_point) > 0:
        diffuse = max(dot(normal, -normalize(to_point)), 0)
    return scale(hit.obj.color, diffuse + ambient)


def cast_with_bounces(
    ray: Ray,
    objs: Sequence[Primitive],
    light_pos: NDArray[np.float32],
    ambient: float,
    bounces: int,
) -> Optional[NDArray[np.float32]]:
    """Trace ``ray`` and sum the direct shading of every surface it bounces off.

    Each hit spawns a secondary ray leaving the surface along its normal, so
    the result is the direct term at the first hit plus the full result of
    the secondary ray with one bounce less. Returns ``None`` when nothing is
    hit or no bounces are left.
    """
    if bounces == 0:
        return None

    hit = cast(objs, ray)
    if hit is None:
        return None

    direct = shade(hit, light_pos, ambient)

    secondary = Ray(
        origin=add(hit.point, scale(normalize(hit.normal), BOUNCE_EPSILON)),
        direction=hit.normal,
    )
    bounced = cast_with_bounces(secondary, objs, light_pos, ambient, bounces - 1)
    if bounced is None:
        bounced = np.zeros(3, dtype=np.float32)

    return add(direct, bounced)


def viewport_point(i: int, width: int, height: int) -> NDArray[np.float32]:
    nx = (i % width) / (width / 2) - 1
    ny = (i // width) / (height / 2) - 1
    return vec3(nx * width / height, -ny, VIEWPORT_DEPTH)


def primary_ray(i: int, width: int, height: int, pose: Pose) -> Ray:
    world_point = pose.orientation @ viewport_point(i, width, height) + pose.position
    return Ray(origin=pose.position, direction=sub(world_point, pose.position))


def to_rgb8(color: Optional[NDArray[np.float32]]) -> Tuple[int, int, int]:
    if color is None:
        return 0, 0, 0
    r, g, b = clamp(np.nan_to_num(color, nan=0.0)) * 255
    return int(r), int(g), int(b)


def render_reference(
    transform: CameraTransform,
    scene: Sequence[Primitive],
    light: NDArray[np.float32],
    ambient: float,
    bounces: int,
    width: int,
    height: int,
) -> Tuple[NDArray[np.uint8], float]:
    """Render pixel by pixel in plain Python; slow, used to check the kernel."""
    pose = transform.pose()
    light = np.asarray(light, dtype=np.float32)
    pixels = np.zeros((width * height, 3), dtype=np.uint8)

    start = time.perf_counter()
    for i in range(width * height):
        ray = primary_ray(i, width, height, pose)
        pixels[i] = to_rgb8(cast_with_bounces(ray, scene, light, ambient, bounces))
    elapsed = time.perf_counter() - start

    logger.info("Reference render %dx%d took %.3fs", width, height, elapsed)
    return pixels.reshape(height, width, 3), elapsed


class CpuApp(App):
    def render(self) -> Tuple[NDArray[np.uint8], float]:
        return render_reference(
            self.camera,
            self.world.objs,
            self.world.light_pos,
            self.world.ambient,
            self.settings.bounces,
            self.settings.width,
            self.settings.height,
        )
