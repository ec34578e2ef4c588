"""Frame-loop building blocks: strings, paths, math, timing, input state, binary files and XML."""

__version__ = "0.1.0"