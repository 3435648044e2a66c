# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .results import OperationResult

__all__ = ["OperationResult"]
