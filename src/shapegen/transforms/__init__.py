# Copyright 2026 Shapegen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Model transforms applied before generation."""

from shapegen.transforms.closure import (
    SYNTHETIC_NAMESPACE,
    SYNTHETIC_SERVICE_ID,
    compute_closure,
    is_synthetic,
    synthesize_service,
)

__all__ = [
    "SYNTHETIC_NAMESPACE",
    "SYNTHETIC_SERVICE_ID",
    "compute_closure",
    "is_synthetic",
    "synthesize_service",
]
