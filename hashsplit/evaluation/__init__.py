from ._evaluate_split import evaluate_split

__all__ = ["evaluate_split"]
