"""Fitting of REACLIB rates to rate data."""

import warnings

import numpy as np
from numpy.typing import ArrayLike, NDArray
from scipy.optimize import OptimizeWarning, curve_fit

from ._01reaclib import ReaclibRate, evaluate

MAX_FUNCTION_EVALUATIONS = 10000


def fit(  # noqa: PLR0913
    rate: ReaclibRate,
    t9: ArrayLike,
    k: ArrayLike,
    sigma: ArrayLike | None = None,
    *,
    log: bool = True,
    maxfev: int = MAX_FUNCTION_EVALUATIONS,
) -> ReaclibRate:
    """Fit the free parameters of a rate to data.

    Fixed parameters are held at their current values. Points outside of the
    temperature domain of the rate, or with non-finite rates, are ignored. There must
    be at least as many remaining points as free parameters.

    By default, residuals are taken in ln k, since rates vary over many orders of
    magnitude. Uncertainties are then converted to relative ones.

    :param rate: Rate, providing the initial guess
    :param t9: Temperatures, in GK
    :param k: Rates, in cm^3/mol/s
    :param sigma: Absolute uncertainties of the rates
    :param log: Whether to fit ln k rather than k
    :param maxfev: Maximum number of model evaluations
    :return: Fitted rate
    """
    t9 = np.array(t9, dtype=np.float64)
    k = np.array(k, dtype=np.float64)
    sigma = None if sigma is None else np.broadcast_to(sigma, k.shape).astype(float)

    t9_min, t9_max = rate.t9_range
    ok = np.isfinite(k) & (t9 >= t9_min) & (t9 <= t9_max)
    if log:
        ok &= k > 0
    t9 = t9[ok]
    k = k[ok]
    sigma = None if sigma is None else sigma[ok]

    rate_fit = rate.model_copy(deep=True)
    free = ~rate.fixed
    if not np.any(free):
        msg = f"Rate {rate.name!r} has no free parameters to fit"
        warnings.warn(msg, stacklevel=2)
        return rate_fit

    nfree = np.count_nonzero(free)
    assert t9.size >= nfree, (
        f"Rate {rate.name!r} has {nfree} free parameters but only {t9.size} usable "
        f"data points in {rate.t9_range}"
    )

    values0 = rate.values

    def model(t9_: NDArray[np.float64], *free_values: float) -> NDArray[np.float64]:
        values = values0.copy()
        values[free] = free_values
        k_ = evaluate(t9_, values)
        return np.log(k_) if log else k_

    y = np.log(k) if log else k
    if sigma is not None and log:
        sigma = sigma / k

    # Covariance is discarded
    with warnings.catch_warnings():
        warnings.filterwarnings("ignore", category=OptimizeWarning)
        popt, _ = curve_fit(
            model,
            t9,
            y,
            p0=values0[free],
            sigma=sigma,
            absolute_sigma=sigma is not None,
            maxfev=maxfev,
        )

    values = values0.copy()
    values[free] = popt
    rate_fit.set_values(values)
    return rate_fit
