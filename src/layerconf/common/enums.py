from enum import Enum


class Destination(str, Enum):
    """Tier that receives a write.

    Reads always consult LOCAL before GLOBAL; writes go to LOCAL unless
    GLOBAL is requested explicitly.
    """

    LOCAL = "local"  # per-deployment overrides
    GLOBAL = "global"  # shared defaults
