import logging
from typing import Optional, Tuple

import numpy as np
from numpy.typing import NDArray

from sphere_rt.camera import CameraTransform
from sphere_rt.common import Settings, World, default_scene

logger = logging.getLogger(__name__)


class App:
    def __init__(
        self,
        settings: Settings,
        world: Optional[World] = None,
        camera: Optional[CameraTransform] = None,
    ):
        self.settings = settings
        self.camera = camera if camera is not None else CameraTransform()
        self.world = world if world is not None else self.create_world()

        self.image = np.zeros(
            (settings.height, settings.width, 3),
            dtype=np.uint8,
        )
        self.time = 0.0

    def render(self) -> Tuple[NDArray[np.uint8], float]:
        raise NotImplementedError

    def run(self) -> NDArray[np.uint8]:
        self.image, self.time = self.render()
        logger.info(
            "Rendered %dx%d, %d bounces, %d spheres in %.4fs (%.1f fps)",
            self.settings.width,
            self.settings.height,
            self.settings.bounces,
            len(self.world.objs),
            self.time,
            self.fps,
        )
        return self.image

    @property
    def fps(self) -> float:
        return 1.0 / self.time if self.time > 0 else float("inf")

    def create_world(self) -> World:
        return World(
            objs=default_scene(),
            light_pos=np.array(self.settings.light_pos, dtype=np.float32),
            ambient=self.settings.ambient,
        )
