"""Strided multidimensional index mappings over flat sequences, with sum and add kernels."""

__version__ = "0.1.0"
__all__ = ["layout_stride", "sums", "kernels", "parallel"]