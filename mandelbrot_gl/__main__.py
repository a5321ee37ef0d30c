"""
Allow running the package directly: python -m mandelbrot_gl
"""
from .app import run


if __name__ == "__main__":
    run()
