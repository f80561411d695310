"""
DIP Engine
Pixel-buffer processing: spatial filters, frequency views, projections, edge heatmaps.
"""

import logging
import sys
import warnings

warnings.filterwarnings('ignore', category=RuntimeWarning)

USAGE = """Usage: python main.py <operation> [--synthetic KEY] [--size N] [--workers N] [--verbose]

Operations:
  filter:<kernel name>     e.g. "filter:Gaussian Blur"
  frequency:<type>         lowpass | highpass | bandpass
  spectrum                 centered log-magnitude view
  projection:<type>        horizontal | vertical | radial | angular | isometric
  blur                     edge-magnitude heatmap

Synthetic images: checkerboard, stripes, gradient, rings, disc"""


def parse_args(args):
    """Split argv into (operation, options)."""
    if not args or args[0] in ('-h', '--help'):
        return None, {}

    options = {'synthetic': 'checkerboard', 'size': 256, 'workers': 1, 'verbose': False}
    operation = args[0]
    rest = iter(args[1:])
    for arg in rest:
        if arg == '--verbose':
            options['verbose'] = True
        elif arg == '--synthetic':
            options['synthetic'] = next(rest)
        elif arg in ('--size', '--workers'):
            options[arg[2:]] = int(next(rest))
        else:
            raise ValueError(f"Unknown argument: {arg}")
    return operation, options


def build_operation(operation: str, config):
    """Resolve an operation string to a callable(data, width, height)."""
    from engines import (
        apply_filter,
        apply_frequency_filter,
        frequency_domain_view,
        apply_projection,
        detect_blur,
    )

    name, _, arg = operation.partition(':')
    if name == 'filter':
        return lambda data, w, h: apply_filter(data, w, h, arg, config=config)
    if name == 'frequency':
        return lambda data, w, h: apply_frequency_filter(data, w, h, arg, config=config)
    if name == 'spectrum':
        return lambda data, w, h: frequency_domain_view(data, w, h, config)
    if name == 'projection':
        return lambda data, w, h: apply_projection(data, w, h, arg, config=config)
    if name == 'blur':
        return lambda data, w, h: detect_blur(data, w, h, config=config)
    raise ValueError(f"Unknown operation: {operation}")


def run_cli(argv=None) -> int:
    """Run one engine operation on a synthetic image and report timing/quality."""
    from models.engine_config import EngineConfig
    from models.errors import EngineError
    from utils.metrics import compute_psnr_ssim, Timer
    from utils.test_images import generate_demo_image

    try:
        operation, options = parse_args(sys.argv[1:] if argv is None else argv)
    except (ValueError, StopIteration) as e:
        print(f"Error: {e}" if str(e) else "Error: missing option value")
        print(USAGE)
        return 2
    if operation is None:
        print(USAGE)
        return 0

    logging.basicConfig(
        level=logging.DEBUG if options['verbose'] else logging.WARNING,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s'
    )

    image = generate_demo_image(options['synthetic'], options['size'])
    if image is None:
        print(f"Error: unknown synthetic image '{options['synthetic']}'")
        return 2

    try:
        config = EngineConfig(workers=options['workers'])
        func = build_operation(operation, config)
        height, width = image.shape[:2]
        print(f"Image: {width}x{height} ({options['synthetic']})")
        print(f"Operation: {operation}")

        timer = Timer()
        output = timer.measure(func, image.reshape(-1), width, height)
    except (EngineError, ValueError) as e:
        print(f"Error: {e}")
        return 1

    metrics = compute_psnr_ssim(image, output.reshape(height, width, 4))

    print("\n=== Results ===")
    print(f"PSNR (Y):  {metrics['psnr_y']:.2f} dB")
    print(f"SSIM (Y):  {metrics['ssim_y']:.4f}")
    print(f"PSNR RGB:  {metrics['psnr_rgb']:.2f} dB")
    print(f"Time:      {timer.elapsed_ms:.2f} ms")
    return 0


def main():
    sys.exit(run_cli())


if __name__ == '__main__':
    main()
