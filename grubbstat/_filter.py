# Identification and rejection of outliers using Grubbs' test.
#
# Copyright 2024 Sergiu Deitsch <sergiu.deitsch@gmail.com>
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

from ._table import MIN_SAMPLE_NUM
from ._table import ConfidenceLevel
from ._table import _check_sample_count
from ._table import critical_value
from dataclasses import dataclass
import logging
import numpy as np

_logger = logging.getLogger(__name__)

SAMPLE_DTYPE = np.dtype([('value', np.float64), ('active', np.bool_)])
"""A single observation along with the flag marking it as not rejected."""


@dataclass(frozen=True)
class GrubbsResult:
    """Outcome of the iterative outlier rejection.

    Attributes
    ----------
    mean : float
        The mean of the retained observations, or 0 if none were retained.
    samples : numpy.ndarray
        The retained observations in ascending order.
    outliers : tuple
        The rejected observations in the order they were rejected.
    rounds : int
        The number of rounds that rejected an observation.
    level : ConfidenceLevel
        The confidence level the test was performed at.
    """

    mean: float
    samples: np.ndarray
    outliers: tuple
    rounds: int
    level: ConfidenceLevel


class GrubbsFilter:
    R"""Iterative outlier rejection using Grubbs' test.

    The observations are sorted in ascending order. In each round, the mean
    :math:`\bar{x}` and the sample standard deviation :math:`s` of the
    retained observations are computed and the first observation (in
    ascending order) whose statistic

    .. math::

        G_i = \frac{|x_i - \bar{x}|}{s}

    exceeds the critical value :math:`G_P(n)` is rejected. Rounds are repeated
    until no observation is rejected or fewer than 3 observations remain.

    Parameters
    ----------
    level : ConfidenceLevel
        The confidence level of the test. Defaults to the most lenient level.
    """

    def __init__(self, level=ConfidenceLevel.P80):
        self.level = level

    @property
    def level(self):
        return self._level

    @level.setter
    def level(self, value):
        try:
            self._level = ConfidenceLevel(value)
        except ValueError:
            raise ValueError(f'unknown confidence level {value!r}') from None

    def __repr__(self):
        return f'{type(self).__name__}(level=ConfidenceLevel.{self.level.name})'

    def filter(self, samples, count=None):
        """Rejects outliers and computes the mean of the remaining samples.

        Parameters
        ----------
        samples : array_like
            1-D array of observations.
        count : int, optional
            The number of leading observations to use. Defaults to all of
            them.

        Returns
        -------
        GrubbsResult

        Raises
        ------
        InvalidSampleCount
            Thrown if `count` is smaller than 3 or larger than 20.
        ValueError
            Thrown if fewer than `count` samples are given or some are not
            finite.
        """
        values = np.ravel(np.asarray(samples, dtype=np.float64))

        if count is None:
            count = values.size

        _check_sample_count(count)

        if count > values.size:
            raise ValueError(
                f'expected at least {count} samples, got {values.size}'
            )

        values = values[:count]

        if not np.all(np.isfinite(values)):
            raise ValueError('samples must be finite')

        data = np.empty(count, dtype=SAMPLE_DTYPE)
        data['value'] = np.sort(values)
        data['active'] = True

        _logger.debug('sorted samples: %s', data['value'])

        outliers = []

        while True:
            idxs = np.flatnonzero(data['active'])
            n = idxs.size

            if n < MIN_SAMPLE_NUM:
                break

            x = data['value'][idxs]
            mean = np.sum(x) / n
            std = np.sqrt(np.sum(np.square(x - mean)) / (n - 1))

            _logger.debug('n = %d, mean = %.6g, std = %.6g', n, mean, std)

            # Identical observations contain no outliers
            if not std > 0:
                break

            gp = critical_value(self.level, n)
            g = np.abs(x - mean) / std
            exceeding = np.flatnonzero(g > gp)

            if exceeding.size == 0:
                break

            pos = exceeding[0]
            k = idxs[pos]
            data['active'][k] = False
            outliers.append(data['value'][k].item())

            _logger.debug(
                'rejected samples[%d] = %.6g, G = %.4f > G_P(%d) = %.3f',
                k,
                data['value'][k],
                g[pos],
                n,
                gp,
            )

        kept = data['value'][data['active']]

        _logger.debug('retained samples: %s', kept)

        mean = np.sum(kept) / kept.size if kept.size > 0 else 0.0

        return GrubbsResult(
            mean=float(mean),
            samples=kept,
            outliers=tuple(outliers),
            rounds=len(outliers),
            level=self.level,
        )

    def process(self, samples, count=None):
        """Computes the mean of `samples` after rejecting outliers.

        Returns
        -------
        mean : float or None
            The mean of the retained samples, or ``None`` on failure.
        ok : bool
            ``False`` if the samples are invalid, e.g., their number is not
            supported.
        """
        try:
            result = self.filter(samples, count)
        except ValueError as e:
            _logger.warning('%s', e)
            return None, False

        return result.mean, True


_default = GrubbsFilter()


def init(level):
    """Sets the process-wide confidence level used by :func:`process`.

    Calls to :func:`init` and :func:`process` from multiple threads must be
    serialized by the caller. Use :class:`GrubbsFilter` instances instead to
    avoid sharing the configuration.
    """
    _default.level = level


def process(samples, count=None):
    """Performs :meth:`GrubbsFilter.process` at the process-wide level."""
    return _default.process(samples, count)


def grubbs(samples, level=ConfidenceLevel.P80):
    """Returns the :class:`GrubbsResult` of filtering `samples` at `level`."""
    return GrubbsFilter(level).filter(samples)
