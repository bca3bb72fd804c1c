"""Level editing core: level model, binary level files, options, actor definitions, viewport logic and I/O connections."""

__version__ = "0.1.0"