"""Scope, public suffix, queue, filter, extension and extraction utilities."""