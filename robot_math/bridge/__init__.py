from .flat import FlatMathBridge, Outcome

__all__ = ["FlatMathBridge", "Outcome"]
