"""
Viewer settings.

Settings live in settings.json next to this module. Set the
MANDELBROT_GL_SETTINGS environment variable to use another file. Whatever
the file provides is merged over DEFAULT_SETTINGS, so it only needs the
keys it changes.
"""

import copy
import json
import logging
import os


_LOGGER = logging.getLogger(__name__)

SETTINGS_ENV = 'MANDELBROT_GL_SETTINGS'
SETTINGS_PATH = os.path.join(os.path.dirname(__file__), 'settings.json')
SHADER_DIR = os.path.join(os.path.dirname(__file__), 'shaders')

DEFAULT_SETTINGS = {
    'window': {
        'width': 640,
        'height': 480,
        'title': 'Mandelbrot (GPU)',
    },
    'view': {
        'offset': [0.0, 0.0],
        'zoom': 1.0,
    },
    'iterations': {
        'default': 100,
        'min': 10,
        'max': 2000,
        'tick_interval': 50,
    },
    'zoom_factor': 1.25,
    'animated': True,
    'log_level': 'INFO',
}


def _merge(base, override):
    """Recursively merge override into a copy of base."""
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_settings(path=None):
    """
    Load settings from a JSON file.

    Args:
        path: File to read (default: $MANDELBROT_GL_SETTINGS or the
            packaged settings.json)

    Returns:
        A settings dict; defaults are used for anything the file lacks or
        if it cannot be read.
    """
    path = path or os.environ.get(SETTINGS_ENV) or SETTINGS_PATH
    try:
        with open(path, 'r') as f:
            data = json.load(f)
    except (FileNotFoundError, json.JSONDecodeError) as e:
        _LOGGER.warning("Could not load %s: %s", path, e)
        return copy.deepcopy(DEFAULT_SETTINGS)

    if not isinstance(data, dict):
        _LOGGER.warning("Ignoring %s: top level must be an object", path)
        return copy.deepcopy(DEFAULT_SETTINGS)
    return _merge(DEFAULT_SETTINGS, data)


def shader_path(name):
    return os.path.join(SHADER_DIR, name)


def read_shader(name):
    """Return the source of a packaged shader file."""
    with open(shader_path(name), 'r') as f:
        return f.read()
