import numpy as np

from utils.common.errors import InvalidParameterError
from utils.data.dataset_utils import Dataset
from utils.models.linear_probability_model import LinearFit


def misclassification_rate(fit: LinearFit, dataset: Dataset) -> float:
    """
    Fraction of observations whose thresholded LPM prediction differs from `value`.
    """
    if len(dataset) == 0:
        raise InvalidParameterError("misclassification_rate requires a non-empty dataset")

    preds = fit.predict(dataset.coordinates())
    return float(np.mean(preds != dataset.values()))
