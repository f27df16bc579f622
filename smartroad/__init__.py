"""Traffic simulation of a four-way intersection without traffic lights, with a pygame front end."""

__version__ = "0.1.0"
__all__ = ["__version__"]