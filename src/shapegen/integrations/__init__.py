# Copyright 2026 Shapegen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Built-in integrations: core annotation initializers and doc comments."""

from shapegen.integrations.core import CoreIntegration
from shapegen.integrations.docs import DocstringIntegration

__all__ = ["CoreIntegration", "DocstringIntegration"]
