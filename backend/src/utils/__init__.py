"""Shared catalog data for the grip wax advisor."""

from .wax_catalog import SWIX_WAXES, get_wax, waxes_for_snow_type

__all__ = ["SWIX_WAXES", "get_wax", "waxes_for_snow_type"]
