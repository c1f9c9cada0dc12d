"""
High-level user API: selection, rendering and I/O helpers around
:py:class:`~ora_tools.api.ora_image.ORAImage`.
"""
