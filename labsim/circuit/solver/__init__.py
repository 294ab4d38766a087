from .gauss import GaussResult, gauss_solve  # noqa: F401

__all__ = ["GaussResult", "gauss_solve"]
