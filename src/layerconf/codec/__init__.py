"""Codecs for the on-disk text format and for list values.

- text: section/``key = value`` reader and writer
- lists: comma separated list values with backslash escapes
"""
