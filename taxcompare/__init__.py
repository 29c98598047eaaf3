"""Personal vs. small-business corporation tax comparison."""

__version__ = "0.1.0"
