"""Class map model shared by the scanner and the exporters."""

from .model import ClassMap, GLOBAL_VARIABLE, LOCAL_VARIABLE

__all__ = ["ClassMap", "GLOBAL_VARIABLE", "LOCAL_VARIABLE"]
