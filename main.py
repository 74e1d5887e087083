import argparse
import logging

import numpy as np

from sphere_rt.camera import CameraTransform
from sphere_rt.common import Settings
from sphere_rt.cpu_rt import CpuApp
from sphere_rt.numba_rt import NumbaApp, compile_kernels

import matplotlib.pyplot as plt


def parse_args(argv=None):
    parser = argparse.ArgumentParser()
    parser.add_argument("--serial", action="store_true", help="Trace pixels on a single thread")
    parser.add_argument("--reference", action="store_true", help="Use the plain Python tracer")

    parser.add_argument("--width", type=int, default=800, help="Image width")
    parser.add_argument("--height", type=int, default=600, help="Image height")
    parser.add_argument("--bounces", type=int, default=2, help="Number of times a ray can bounce")
    parser.add_argument("--ambient", type=float, default=0.15, help="Ambient light term")
    parser.add_argument("--light", type=float, nargs=3, default=[0.0, 0.0, 0.0],
                        metavar=("X", "Y", "Z"), help="Light position")

    parser.add_argument("--rot", type=float, nargs=3, default=[0.0, 0.0, 0.0],
                        metavar=("X", "Y", "Z"), help="Camera rotation in radians")
    parser.add_argument("--trans", type=float, nargs=3, default=[0.0, 0.0, 0.0],
                        metavar=("X", "Y", "Z"), help="Camera position")

    parser.add_argument("--output", "-o", help="Save the image instead of showing it")
    parser.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])

    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)

    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    settings = Settings(
        width=args.width,
        height=args.height,
        bounces=args.bounces,
        ambient=args.ambient,
        light_pos=np.array(args.light, dtype=np.float32),
    )
    camera = CameraTransform(*args.rot, *args.trans)

    if args.reference:
        app = CpuApp(settings, camera=camera)
    else:
        compile_kernels()
        app = NumbaApp(settings, camera=camera, parallel=not args.serial)

    app.run()

    if args.output:
        plt.imsave(args.output, app.image)
        logging.getLogger(__name__).info("Saved %s", args.output)
    else:
        plt.imshow(app.image)
        plt.show(block=True)


if __name__ == "__main__":
    main()
