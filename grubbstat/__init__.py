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

from ._filter import GrubbsFilter
from ._filter import GrubbsResult
from ._filter import SAMPLE_DTYPE
from ._filter import grubbs
from ._filter import init
from ._filter import process
from ._table import CRITICAL_VALUES
from ._table import MAX_SAMPLE_NUM
from ._table import MIN_SAMPLE_NUM
from ._table import ConfidenceLevel
from ._table import InvalidSampleCount
from ._table import critical_value
from ._table import gcrit
import logging

logging.getLogger(__name__).addHandler(logging.NullHandler())

__author__ = 'Sergiu Deitsch'

__all__ = (
    'CRITICAL_VALUES',
    'ConfidenceLevel',
    'GrubbsFilter',
    'GrubbsResult',
    'InvalidSampleCount',
    'MAX_SAMPLE_NUM',
    'MIN_SAMPLE_NUM',
    'SAMPLE_DTYPE',
    'critical_value',
    'gcrit',
    'grubbs',
    'init',
    'process',
)
