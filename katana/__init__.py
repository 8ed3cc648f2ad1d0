"""Crawling building blocks: scope, queues, filters, extraction and output."""

__version__ = "0.1.0"