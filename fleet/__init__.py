"""fleet/ -- Car catalog used by the favorites relation.

Layer rule: fleet/ imports only stdlib, third-party libraries and core/.
auth/ may read fleet's schema for the favorites join; fleet never imports auth/.
"""
