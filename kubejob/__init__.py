"""Job conditions, replica accounting, loggers and TestJob fixtures for training-job controllers."""

__version__ = "0.1.0"