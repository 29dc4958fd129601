# Copyright 2026 Shapegen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Sphinx configuration for the shapegen API documentation."""

project = "shapegen"
author = "Shapegen Contributors"
release = "0.1.0"

# Docstrings follow the Google style.
extensions: list[str] = ["sphinx.ext.autodoc", "sphinx.ext.napoleon"]
autodoc_member_order = "bysource"

html_theme = "alabaster"
