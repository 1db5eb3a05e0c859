import os
import sys
import warnings
from argparse import ArgumentParser
from dataclasses import replace
from pathlib import Path

_VERBOSE_FLAGS = {"--verbose", "-v"}
_cli_verbose = any(arg in _VERBOSE_FLAGS for arg in sys.argv[1:])
_env_log_level = os.environ.get("TF_CPP_MIN_LOG_LEVEL")
_suppress_messages = (not _cli_verbose) and _env_log_level != "0"

if _suppress_messages and _env_log_level is None:
    os.environ["TF_CPP_MIN_LOG_LEVEL"] = "3"

if _suppress_messages:
    warnings.filterwarnings(
        "ignore",
        message=r"Protobuf gencode version .* is exactly one major version older than the runtime version .*",
        category=UserWarning,
        module="google.protobuf",
    )

VERBOSE = _cli_verbose


def log(message, *args, **kwargs):
    if VERBOSE:
        print(message, *args, **kwargs)


def set_verbose(verbose):
    """Apply the resolved verbosity, including TensorFlow's C++ logging.

    TensorFlow is imported lazily, so clearing the suppression here still
    takes effect when verbosity comes from settings rather than ``-v``.
    """

    global VERBOSE, _suppress_messages
    VERBOSE = bool(verbose)
    _suppress_messages = (not VERBOSE) and _env_log_level != "0"
    if _env_log_level is None:
        if _suppress_messages:
            os.environ["TF_CPP_MIN_LOG_LEVEL"] = "3"
        else:
            os.environ.pop("TF_CPP_MIN_LOG_LEVEL", None)


from tqdm import tqdm

from escapetime import (
    BACKENDS,
    SettingsError,
    compose,
    compose_ascii,
    load_settings,
    print_ascii,
    write_ascii,
    write_image,
)


def build_parser():
    parser = ArgumentParser(description="Render the Mandelbrot set as ASCII art and as a grayscale image.")

    parser.add_argument('--settings', type=str,
                        dest='settings', help='JSON settings file. Defaults to $MANDELBROT_SETTINGS when set.',
                        metavar='FILE')

    parser.add_argument('--width', type=int,
                        dest='width', help='width of the rendered image in pixels',
                        metavar='WIDTH')

    parser.add_argument('--height', type=int,
                        dest='height', help='height of the rendered image in pixels',
                        metavar='HEIGHT')

    parser.add_argument('--iterations', type=int,
                        dest='iterations', help='maximum number of iterations per pixel. Counts above 255 saturate.',
                        metavar='ITERATIONS')

    parser.add_argument('--output', type=str,
                        dest='output', help='path of the image file. The format follows the extension, PNG by default.',
                        metavar='PATH')

    parser.add_argument('--ascii-output', type=str,
                        dest='ascii_output', help='write the ASCII rendering to this file instead of the terminal',
                        metavar='PATH')

    parser.add_argument('--backend', choices=BACKENDS,
                        dest='backend', help='escape-time implementation used for the image')

    parser.add_argument('--no-ascii', dest='ascii', action='store_false', default=None,
                        help='skip the ASCII rendering')

    parser.add_argument('--no-image', dest='image', action='store_false', default=None,
                        help='skip the image rendering')

    parser.add_argument('-v', '--verbose', action='store_true', default=None,
                        help='Enable verbose logging, including TensorFlow diagnostics.')

    return parser


def resolve_settings(opt):
    """Merge command-line options over the file and environment settings."""

    settings = load_settings(opt.settings)
    overrides = {
        "width": opt.width,
        "height": opt.height,
        "iterations": opt.iterations,
        "image_path": Path(opt.output).expanduser() if opt.output else None,
        "ascii_path": Path(opt.ascii_output).expanduser() if opt.ascii_output else None,
        "backend": opt.backend,
        "ascii": opt.ascii,
        "image": opt.image,
        "verbose": opt.verbose,
    }
    overrides = {key: value for key, value in overrides.items() if value is not None}
    return replace(settings, **overrides).validate()


def _log_tensorflow():
    import tensorflow as tf

    if _suppress_messages and not VERBOSE:
        tf.get_logger().setLevel("ERROR")
    log("TensorFlow version: %s" % tf.__version__)


def run_ascii(settings):
    grid = compose_ascii()
    if settings.ascii_path is None:
        print_ascii(grid)
    else:
        path = write_ascii(grid, settings.ascii_path)
        log("Wrote ASCII rendering to %s" % path)


def run_image(settings):
    if settings.backend == "tensorflow":
        _log_tensorflow()
    log("Rendering %dx%d image with %d iterations (%s backend)"
        % (settings.width, settings.height, settings.iterations, settings.backend))

    with tqdm(total=settings.width * settings.height, unit="px", desc="Rendering") as bar:
        buffer = compose(settings.width, settings.height, settings.iterations,
                         backend=settings.backend, progress=bar.update)

    path = write_image(buffer, settings.image_path)
    log("Wrote image to %s" % path)


def main(argv=None):
    parser = build_parser()
    opt = parser.parse_args(argv)

    try:
        settings = resolve_settings(opt)
    except SettingsError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    set_verbose(settings.verbose)

    if settings.ascii:
        try:
            run_ascii(settings)
        except OSError as exc:
            print(f"error: unable to write {settings.ascii_path}: {exc}", file=sys.stderr)
            return 1

    if settings.image:
        try:
            run_image(settings)
        except (OSError, ValueError) as exc:
            print(f"error: unable to write {settings.image_path}: {exc}", file=sys.stderr)
            return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
