from utils.models.linear_probability_model import LinearFit, fit_linear_probability_model

__all__ = [
    "LinearFit",
    "fit_linear_probability_model",
]
