# Copyright 2026 Shapegen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Template writer, import tracking and section interceptors."""

from shapegen.writer.imports import INDENT, ImportContainer
from shapegen.writer.interceptors import Appender, CodeInterceptor, InterceptorRegistry, Prepender
from shapegen.writer.template import Template, TemplateError, parse_template
from shapegen.writer.writer import CodeWriter, Formatter, WriterStateError, normalize_whitespace

__all__ = [
    "INDENT",
    "Appender",
    "CodeInterceptor",
    "CodeWriter",
    "Formatter",
    "ImportContainer",
    "InterceptorRegistry",
    "Prepender",
    "Template",
    "TemplateError",
    "WriterStateError",
    "normalize_whitespace",
    "parse_template",
]
