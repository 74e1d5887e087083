import logging
import math
import time
from typing import List, Sequence, Tuple

import numba
import numpy as np
from numba import prange
from numpy.typing import NDArray

from sphere_rt.app import App
from sphere_rt.camera import CameraTransform
from sphere_rt.common import Primitive, Sphere

logger = logging.getLogger(__name__)

BOUNCE_EPSILON = 0.01
VIEWPORT_DEPTH = 5.0
BACKGROUND = (0.0, 0.0, 0.0)

Vec = Tuple[float, float, float]

# float edge cases follow IEEE instead of raising ZeroDivisionError
device_function = numba.njit(error_model="numpy")


@device_function
def add(vec1: Vec, vec2: Vec) -> Vec:
    return vec1[0] + vec2[0], vec1[1] + vec2[1], vec1[2] + vec2[2]


@device_function
def sub(vec1: Vec, vec2: Vec) -> Vec:
    return vec1[0] - vec2[0], vec1[1] - vec2[1], vec1[2] - vec2[2]


@device_function
def mul_scalar(vec: Vec, x: float) -> Vec:
    return vec[0] * x, vec[1] * x, vec[2] * x


@device_function
def dot(vec1: Vec, vec2: Vec) -> float:
    return vec1[0] * vec2[0] + vec1[1] * vec2[1] + vec1[2] * vec2[2]


@device_function
def normalize(vec: Vec) -> Vec:
    return mul_scalar(vec, 1.0 / dot(vec, vec) ** 0.5)


@device_function
def clip(value: float, low: float, high: float) -> float:
    return min(max(value, low), high)


@device_function
def to_byte(value: float) -> int:
    if math.isnan(value):
        return 0
    return int(clip(value, 0.0, 1.0) * 255.0)


@device_function
def load_vec(array: List[List[float]], row: int, col: int) -> Vec:
    # scene data is packed as float32, tracing runs in float64
    return float(array[row, col]), float(array[row, col + 1]), float(array[row, col + 2])


@device_function
def intersect(spheres: List[List[float]], k: int, ray_origin: Vec, ray_dir: Vec) -> Tuple[bool, Vec, float, Vec]:
    """Returns (did_hit, point, squared distance, unnormalized normal)."""
    center = load_vec(spheres, k, 0)
    radius = float(spheres[k, 3])

    if dot(ray_dir, sub(center, ray_origin)) < 0.0:
        return False, ray_origin, 0.0, ray_origin

    a = dot(ray_dir, ray_dir)
    if a == 0.0:
        return False, ray_origin, 0.0, ray_origin

    b = 2.0 * dot(ray_origin, ray_dir) - 2.0 * dot(ray_dir, center)
    c = dot(center, center) - 2.0 * dot(center, ray_origin) + dot(ray_origin, ray_origin) - radius * radius
    delta = b * b - 4.0 * a * c
    if delta < 0.0:
        return False, ray_origin, 0.0, ray_origin

    sqrt_delta = delta ** 0.5
    p1 = add(ray_origin, mul_scalar(ray_dir, (-b + sqrt_delta) / (2.0 * a)))
    p2 = add(ray_origin, mul_scalar(ray_dir, (-b - sqrt_delta) / (2.0 * a)))

    point = p1
    if dot(sub(p1, center), ray_dir) > 0.0:
        point = p2

    offset = sub(point, ray_origin)
    return True, point, dot(offset, offset), sub(point, center)


@device_function
def shoot_ray(spheres: List[List[float]], ray_origin: Vec, ray_dir: Vec) -> Tuple[int, Vec, Vec]:
    """Nearest hit over the whole scene; index -1 on a miss."""
    nearest = -1
    dist_to_nearest = 0.0
    point = ray_origin
    normal = ray_origin
    for k in range(spheres.shape[0]):
        did_hit, p, dist2, n = intersect(spheres, k, ray_origin, ray_dir)
        if did_hit and (nearest == -1 or dist2 < dist_to_nearest):
            nearest = k
            dist_to_nearest = dist2
            point = p
            normal = n
    return nearest, point, normal


@device_function
def shade(spheres: List[List[float]], k: int, point: Vec, normal: Vec, light_pos: Vec, ambient: float) -> Vec:
    to_point = sub(point, light_pos)

    # a light sitting on the surface adds no diffuse term
    diffuse = 0.0
    if dot(to_point, to_point) > 0.0:
        diffuse = max(dot(normalize(normal), mul_scalar(normalize(to_point), -1.0)), 0.0)
    return mul_scalar(load_vec(spheres, k, 4), diffuse + ambient)


@device_function
def trace(
    spheres: List[List[float]],
    ray_origin: Vec,
    ray_dir: Vec,
    light_pos: Vec,
    ambient: float,
    bounces: int,
) -> Tuple[bool, Vec]:
    did_hit = False
    ray_color = (0.0, 0.0, 0.0)
    for _ in range(bounces):
        nearest, point, normal = shoot_ray(spheres, ray_origin, ray_dir)
        if nearest == -1:
            break
        did_hit = True
        ray_color = add(ray_color, shade(spheres, nearest, point, normal, light_pos, ambient))

        # secondary ray leaves along the surface normal
        ray_origin = add(point, mul_scalar(normalize(normal), BOUNCE_EPSILON))
        ray_dir = normal
    return did_hit, ray_color


@device_function
def get_pixel_color(
    i: int,
    width: int,
    height: int,
    orientation: List[List[float]],
    position: List[float],
    spheres: List[List[float]],
    light_pos: List[float],
    ambient: float,
    bounces: int,
) -> Tuple[int, int, int]:
    nx = (i % width) / (width / 2.0) - 1.0
    ny = (i // width) / (height / 2.0) - 1.0
    viewport = (nx * width / height, -ny, VIEWPORT_DEPTH)

    ray_origin = (float(position[0]), float(position[1]), float(position[2]))
    world_point = (
        dot(load_vec(orientation, 0, 0), viewport) + ray_origin[0],
        dot(load_vec(orientation, 1, 0), viewport) + ray_origin[1],
        dot(load_vec(orientation, 2, 0), viewport) + ray_origin[2],
    )
    light = (float(light_pos[0]), float(light_pos[1]), float(light_pos[2]))

    did_hit, color = trace(spheres, ray_origin, sub(world_point, ray_origin), light, ambient, bounces)
    if not did_hit:
        color = BACKGROUND
    return to_byte(color[0]), to_byte(color[1]), to_byte(color[2])


@numba.njit(parallel=True, error_model="numpy")
def render_pixels(image, width, height, orientation, position, spheres, light_pos, ambient, bounces):
    for i in prange(width * height):
        r, g, b = get_pixel_color(i, width, height, orientation, position, spheres, light_pos, ambient, bounces)
        image[i, 0] = r
        image[i, 1] = g
        image[i, 2] = b


@numba.njit(error_model="numpy")
def render_pixels_serial(image, width, height, orientation, position, spheres, light_pos, ambient, bounces):
    for i in range(width * height):
        r, g, b = get_pixel_color(i, width, height, orientation, position, spheres, light_pos, ambient, bounces)
        image[i, 0] = r
        image[i, 1] = g
        image[i, 2] = b


def world_to_arrays(scene: Sequence[Primitive]) -> NDArray[np.float32]:
    spheres = np.zeros((len(scene), 7), dtype=np.float32)
    for k, obj in enumerate(scene):
        if not isinstance(obj, Sphere):
            raise TypeError(f"Unsupported scene object: {type(obj).__name__}")
        spheres[k, :3] = obj.center
        spheres[k, 3] = obj.radius
        spheres[k, 4:] = obj.color
    return spheres


def render(
    transform: CameraTransform,
    scene: Sequence[Primitive],
    light: NDArray[np.float32],
    ambient: float,
    bounces: int,
    width: int,
    height: int,
    parallel: bool = True,
) -> Tuple[NDArray[np.uint8], float]:
    """Render one frame.

    The camera pose and a packed copy of the scene are taken once, before any
    pixel is traced, and shared read-only by every pixel. Returns the
    ``(height, width, 3)`` RGB image with row 0 at the top and the wall-clock
    duration of the pixel pass in seconds.
    """
    pose = transform.pose()
    orientation = np.ascontiguousarray(pose.orientation, dtype=np.float32)
    position = np.ascontiguousarray(pose.position, dtype=np.float32)
    spheres = world_to_arrays(scene)
    light_pos = np.asarray(light, dtype=np.float32)

    image = np.zeros((width * height, 3), dtype=np.uint8)
    kernel = render_pixels if parallel else render_pixels_serial

    start = time.perf_counter()
    kernel(image, width, height, orientation, position, spheres, light_pos, float(ambient), int(bounces))
    elapsed = time.perf_counter() - start

    logger.debug("Pixel pass (%s) took %.4fs", "parallel" if parallel else "serial", elapsed)
    return image.reshape(height, width, 3), elapsed


def compile_kernels():
    logger.debug("Compiling render kernels, %d threads available", numba.config.NUMBA_NUM_THREADS)
    scene = [Sphere(center=np.array([0.0, 0.0, 3.0]), radius=1.0, color=np.ones(3))]
    for parallel in (True, False):
        render(CameraTransform(), scene, np.zeros(3), 0.0, 1, 1, 1, parallel=parallel)


class NumbaApp(App):
    def __init__(self, settings, world=None, camera=None, parallel=True):
        super().__init__(settings, world, camera)
        self.parallel = parallel

    def render(self) -> Tuple[NDArray[np.uint8], float]:
        return render(
            self.camera,
            self.world.objs,
            self.world.light_pos,
            self.world.ambient,
            self.settings.bounces,
            self.settings.width,
            self.settings.height,
            parallel=self.parallel,
        )
