from .lpm_metrics import misclassification_rate

__all__ = [
    "misclassification_rate",
]
