from splitarchitect.elements.split import Interval, Split
from splitarchitect.elements.split_system import SplitSystem
from splitarchitect.elements.characters import Characters

__all__ = ["Interval", "Split", "SplitSystem", "Characters"]
