"""Enumerations shared across layerconf packages."""

from layerconf.common.enums import Destination

__all__ = ["Destination"]
