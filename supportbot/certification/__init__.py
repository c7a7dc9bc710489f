from .graph import CertificationRoute, build_certification_graph

__all__ = ["build_certification_graph", "CertificationRoute"]
