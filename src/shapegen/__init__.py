# Copyright 2026 Shapegen Contributors
# SPDX-License-Identifier: Apache-2.0

"""shapegen: Rust code generation for Smithy-style shape models."""

__version__ = "0.1.0"
