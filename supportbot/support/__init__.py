from .graph import build_support_graph
from .state import BillingRoute, InitialRoute, SupportState

__all__ = ["build_support_graph", "SupportState", "InitialRoute", "BillingRoute"]
