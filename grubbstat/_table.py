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

from enum import IntEnum
from scipy.stats import t as student_t
import numpy as np

MIN_SAMPLE_NUM = 3
MAX_SAMPLE_NUM = 20


class InvalidSampleCount(ValueError):
    """Raised if the number of observations is outside the tabulated range."""


class ConfidenceLevel(IntEnum):
    R"""Confidence level :math:`P = 1 - \alpha` of the test.

    Members are ordered from the strictest to the most lenient level and are
    used as row indices into :data:`CRITICAL_VALUES`.
    """

    P99 = 0
    P95 = 1
    P90 = 2
    P80 = 3

    @property
    def confidence(self):
        return _CONFIDENCE[self]

    @property
    def alpha(self):
        return round(1.0 - self.confidence, 2)


_CONFIDENCE = (0.99, 0.95, 0.90, 0.80)

# One-sided Grubbs critical values G_P(n). Column k corresponds to n = k + 3.
CRITICAL_VALUES = np.array(
    [
        [1.155, 1.492, 1.749, 1.944, 2.097, 2.220, 2.323, 2.410, 2.485,
         2.550, 2.607, 2.659, 2.705, 2.747, 2.785, 2.821, 2.854, 2.884],
        [1.153, 1.463, 1.672, 1.822, 1.938, 2.032, 2.110, 2.176, 2.234,
         2.285, 2.331, 2.371, 2.409, 2.443, 2.475, 2.501, 2.532, 2.557],
        [1.148, 1.425, 1.602, 1.729, 1.828, 1.909, 1.977, 2.036, 2.088,
         2.134, 2.175, 2.213, 2.247, 2.279, 2.309, 2.335, 2.361, 2.385],
        [1.148, 1.156, 1.252, 1.329, 1.428, 1.509, 1.577, 1.636, 1.688,
         1.734, 1.775, 1.813, 1.847, 1.879, 1.909, 1.935, 1.961, 1.985],
    ]
)
CRITICAL_VALUES.setflags(write=False)


def _check_sample_count(size):
    if size < MIN_SAMPLE_NUM or size > MAX_SAMPLE_NUM:
        raise InvalidSampleCount(
            f'invalid number of samples ({size}); expected between '
            f'{MIN_SAMPLE_NUM} and {MAX_SAMPLE_NUM}'
        )


def critical_value(level, size):
    """Returns the tabulated critical value :math:`G_P(n)`.

    Parameters
    ----------
    level : ConfidenceLevel
        The confidence level of the test.
    size : int
        The number of observations :math:`n`.

    Raises
    ------
    InvalidSampleCount
        Thrown if `size` is not within ``[MIN_SAMPLE_NUM, MAX_SAMPLE_NUM]``.
    """
    _check_sample_count(size)
    return CRITICAL_VALUES[ConfidenceLevel(level), size - MIN_SAMPLE_NUM].item()


def gcrit(size, alpha=0.05, alternative='one-sided'):
    R"""Computes the exact critical value of Grubbs' statistic.

    .. math::

        G_{\text{crit}}
        =
        \frac{n-1}{\sqrt{n}}
        \sqrt{\frac{t^2_{\alpha/n,n-2}}{n-2+t^2_{\alpha/n,n-2}}}

    where :math:`t_{\alpha/n,n-2}` is the upper critical value of Student's
    t distribution with :math:`n-2` degrees of freedom. For the two-sided
    test :math:`\alpha/n` is replaced by :math:`\alpha/(2n)`.

    Parameters
    ----------
    size : int
        The number of observations :math:`n`.
    alpha : float
        The significance level.
    alternative : `{'one-sided', 'two-sided'}`, str
        ``one-sided`` for testing only the minimum or the maximum,
        ``two-sided`` for testing both.
    """
    if size < MIN_SAMPLE_NUM:
        raise ValueError("Grubbs' test requires at least 3 samples")

    if not 0.0 < alpha < 1.0:
        raise ValueError('significance level must be within (0, 1)')

    if alternative == 'one-sided':
        q = alpha / size
    elif alternative == 'two-sided':
        q = alpha / (2.0 * size)
    else:
        raise ValueError('unknown parameter value \'{}\''.format(alternative))

    t = student_t.isf(q, size - 2)
    t2 = np.square(t)

    return (size - 1) / np.sqrt(size) * np.sqrt(t2 / (size - 2 + t2))
