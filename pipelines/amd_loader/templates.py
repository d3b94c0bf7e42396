"""Jinja2 templates for the nested loader and its flat companion."""

from __future__ import annotations

from jinja2 import Environment, StrictUndefined, Template

# ERB-style delimiters keep the JavaScript braces literal.
_ENV = Environment(
    variable_start_string="<%=",
    variable_end_string="%>",
    undefined=StrictUndefined,
    keep_trailing_newline=True,
    autoescape=False,
)

MODULE_TEMPLATE: Template = _ENV.from_string(
    "define(function (require) { <%= eol %><%= body %><%= eol %>});"
)

REQUIRE_TEMPLATE: Template = _ENV.from_string(
    "\t require([<%= modules %>],function (){<%= eol %>"
    "<%= body %><%= eol %>\t });"
)

BUNDLE_TEMPLATE: Template = _ENV.from_string(
    "define([<%= modules %>],function () {});"
)


def render_module(body: str, eol: str) -> str:
    return MODULE_TEMPLATE.render(body=body, eol=eol)


def render_require(modules: str, body: str, eol: str) -> str:
    return REQUIRE_TEMPLATE.render(modules=modules, body=body, eol=eol)


def render_bundle(modules: str) -> str:
    return BUNDLE_TEMPLATE.render(modules=modules)
