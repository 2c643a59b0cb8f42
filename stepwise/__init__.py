# Stepwise: goals decomposed into ordered, arbitrarily deep step trees.

from stepwise.models import Goal, Step

__all__ = ["Goal", "Step"]

__version__ = "0.1.0"
